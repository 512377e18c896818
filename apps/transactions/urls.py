from django.urls import path
from . import views

app_name = 'transactions'

urlpatterns = [
    path('transactions', views.transaction_list, name='transaction_list'),

    # 대시보드/리포트 요약
    path('transactions/summary', views.transaction_summary, name='transaction_summary'),
    path('transactions/categories', views.category_list, name='category_list'),

    path('transactions/<int:pk>', views.transaction_detail, name='transaction_detail'),
]
