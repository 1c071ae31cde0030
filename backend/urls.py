"""
Classify Backend URL Configuration

Mounts the Django admin and the Classify API. All API routes live below
/api/ and are defined in classify/urls.py.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("classify.urls")),
]
