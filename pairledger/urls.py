from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/companies/', include('apps.companies.urls')),
    path('api/pairs/', include('apps.pairs.urls')),
    path('api/', include('apps.analytics.urls')),
    path('health/', include('apps.core.health_urls')),
]

admin.site.site_header = "Pair Ledger Administration"
admin.site.site_title = "Pair Ledger Admin"
admin.site.index_title = "Welcome to Pair Ledger"
