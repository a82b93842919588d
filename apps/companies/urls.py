from django.urls import path
from . import views

urlpatterns = [
    path('', views.company_collection, name='company_collection'),
    path('<str:pk>', views.company_detail, name='company_detail'),
]
