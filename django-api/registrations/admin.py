from django.contrib import admin

from registrations.models import Registration, RegistrationCredential


class RegistrationCredentialInline(admin.TabularInline):
    model = RegistrationCredential
    fk_name = "registration"
    extra = 0
    readonly_fields = ["token", "artifact_name", "issued_at", "revoked_at", "superseded_by"]


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ["user", "event", "payment_status", "attended", "registration_date"]
    list_filter = ["payment_status", "attended"]
    inlines = [RegistrationCredentialInline]
