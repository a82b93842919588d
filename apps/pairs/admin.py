# ===== apps/pairs/admin.py =====
from django.contrib import admin
from .models import Pair


@admin.register(Pair)
class PairAdmin(admin.ModelAdmin):
    list_display = [
        'name', 'company', 'buy_stock_code', 'sell_stock_code',
        'is_settled', 'profit_loss', 'updated_at',
    ]
    list_filter = ['is_settled', 'company']
    search_fields = ['name', 'company__name', 'buy_stock_code', 'sell_stock_code']
    raw_id_fields = ['company']
    readonly_fields = ['buy_profit_loss', 'sell_profit_loss', 'profit_loss', 'created_at', 'updated_at']
