from django.contrib import admin
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = [
        'user',
        'get_email',
        'is_verified',
        'get_push_enabled',
        'created_at',
    ]

    list_display_links = ['user', 'get_email']

    list_filter = [
        'is_verified',
        'created_at',
    ]

    search_fields = [
        'user__username',
        'user__email',
    ]

    fieldsets = [
        ('기본 정보', {
            'fields': ('user', 'is_verified')
        }),
        ('알림', {
            'fields': ('push_token',),
            'classes': ('wide',),
        }),
        ('타임스탬프', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']

    @admin.display(description='이메일')
    def get_email(self, obj):
        return obj.user.email

    @admin.display(description='푸시 알림', boolean=True)
    def get_push_enabled(self, obj):
        return obj.has_push_token
