"""
URL configuration for ijtemaa_project project.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),  # Django's default admin (optional)
    path('panel/', include('participants.urls')),  # Registration desk panel
    path('api/', include('participants.api_urls')),
]
