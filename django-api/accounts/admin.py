from django.contrib import admin

from accounts.models import Organization, User


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ["name", "contact_email", "city", "created_at"]
    search_fields = ["name", "contact_email"]


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ["username", "email", "created_at"]
    search_fields = ["username", "email"]
    filter_horizontal = ["organizations"]
