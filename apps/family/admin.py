from django.contrib import admin
from django.db.models import Count

from .models import FamilyMember


@admin.register(FamilyMember)
class FamilyMemberAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'get_transaction_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'user__username', 'user__email']
    readonly_fields = ['created_at', 'updated_at']

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(tx_count=Count('transactions'))

    @admin.display(description='거래 수', ordering='tx_count')
    def get_transaction_count(self, obj):
        return obj.tx_count
