"""URL configuration for pool access API.

Include in your project:
    path('api/', include('django_pool_access.urls')),
"""

from django.urls import path

from . import views

app_name = 'pool_access'

urlpatterns = [
    path('pool/guests/', views.guests_collection, name='guests'),
    path('pool/guests/<str:entry_id>/', views.guest_detail, name='guest_detail'),
    path('pool/accesses/', views.accesses_collection, name='accesses'),
    path('pool/accesses/active/', views.active_accesses, name='active_accesses'),
    path('pool/accesses/<str:access_id>/exit/', views.access_exit, name='access_exit'),
    path('pool/stats/', views.stats, name='stats'),
    path('pool/config/', views.config_detail, name='config'),
]
