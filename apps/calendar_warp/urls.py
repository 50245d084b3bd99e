from django.urls import path
from . import views

urlpatterns = [
    path('auth/start/', views.CalendarAuthStartView.as_view(), name='calendar_auth_start'),
    path('auth/callback/', views.CalendarAuthCallbackView.as_view(), name='calendar_auth_callback'),
]
