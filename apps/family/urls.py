from django.urls import path
from . import views

app_name = 'family'

urlpatterns = [
    path('family-members', views.member_list, name='member_list'),
    path('family-members/<int:pk>', views.member_detail, name='member_detail'),
]
