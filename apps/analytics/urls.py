# ===== apps/analytics/urls.py =====
from django.urls import path
from . import views

urlpatterns = [
    path('duplicate-pairs', views.get_duplicate_pairs, name='duplicate_pairs'),
    path('calculate-profit-loss', views.calculate_profit_loss, name='calculate_profit_loss'),
]
