from django.apps import AppConfig


class CalendarWarpConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.calendar_warp'
    verbose_name = 'Calendar warp'
