from django.contrib import admin
from django.urls import path, include, re_path

from apps.core import views as core_views

urlpatterns = [
    path('admin/', admin.site.urls),

    path('api/health', core_views.health, name='health'),
    path('api/', include('apps.accounts.urls')),
    path('api/', include('apps.transactions.urls')),
    path('api/', include('apps.family.urls')),
    path('api/', include('apps.notifications.urls')),

    # 정의되지 않은 API 경로는 JSON 404
    re_path(r'^api/', core_views.route_not_found),
]
