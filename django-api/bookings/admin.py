from django.contrib import admin

from bookings.models import Venue, VenueBooking


@admin.register(Venue)
class VenueAdmin(admin.ModelAdmin):
    list_display = ["name", "location", "capacity", "amount", "organization"]
    search_fields = ["name", "location"]


@admin.register(VenueBooking)
class VenueBookingAdmin(admin.ModelAdmin):
    list_display = ["venue", "event", "start_date", "end_date", "approval_status"]
    list_filter = ["approval_status", "venue"]
