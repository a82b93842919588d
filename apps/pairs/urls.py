from django.urls import path
from . import views

urlpatterns = [
    path('', views.pair_collection, name='pair_collection'),
    path('<str:pk>', views.pair_detail, name='pair_detail'),
    path('<str:pk>/settle', views.settle_pair, name='settle_pair'),
]
