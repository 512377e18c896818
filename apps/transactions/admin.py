from django.contrib import admin
from django.utils.html import format_html

from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    거래 내역 관리
    """
    list_display = [
        'date',
        'get_type_display_colored',
        'get_amount_display',
        'category',
        'payment_method',
        'get_for_member',
        'user',
    ]

    date_hierarchy = 'date'

    list_filter = [
        'type',
        'payment_method',
        'category',
    ]

    search_fields = ['category', 'description', 'user__username', 'user__email', 'for_member__name']

    list_select_related = ['user', 'for_member']
    readonly_fields = ['created_at', 'updated_at']

    @admin.display(description='구분', ordering='type')
    def get_type_display_colored(self, obj):
        if obj.type == Transaction.INCOME:
            return format_html('<span style="color:green; font-weight:bold;">{}</span>', '수입')
        return format_html('<span style="color:red; font-weight:bold;">{}</span>', '지출')

    @admin.display(description='금액', ordering='amount')
    def get_amount_display(self, obj):
        formatted = f"{obj.amount:,.2f}"
        if obj.type == Transaction.INCOME:
            return format_html('<span style="color:green;">{}</span>', formatted)
        return format_html('<span style="color:red;">{}</span>', formatted)

    @admin.display(description='대상', ordering='for_member__name')
    def get_for_member(self, obj):
        return obj.for_member_name
