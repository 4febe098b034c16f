"""
URL configuration for prj project.

  path('billing/', include('finances.urls')),               # fees, enrollment, payments, reports
  path('communications/', include('communications.urls')),  # notification log
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),

    path('billing/', include('finances.urls')),
    path('communications/', include('communications.urls')),
]
