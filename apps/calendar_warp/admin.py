from django.contrib import admin
from .models import CalendarToken, SavedEvent


@admin.register(CalendarToken)
class CalendarTokenAdmin(admin.ModelAdmin):
    list_display = ('account_email', 'token_expiry', 'created_at', 'updated_at')
    search_fields = ('account_email',)


@admin.register(SavedEvent)
class SavedEventAdmin(admin.ModelAdmin):
    list_display = ('name', 'remote_id', 'original_start', 'created_at')
    search_fields = ('name', 'remote_id')
    readonly_fields = ('name', 'remote_id', 'original_start', 'created_at', 'updated_at')
