from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    # POST: 토큰 저장 / DELETE: 구독 해제
    path('notifications/push-token', views.push_token, name='push_token'),
    path('notifications/status', views.push_status, name='status'),
    path('notifications/test', views.test_notification, name='test'),
]
