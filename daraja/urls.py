from django.urls import path
from . import views

urlpatterns = [
    path('', views.stk_push, name='stk_push'),
    path('status/', views.stk_push_status, name='stk_push_status'),
]
