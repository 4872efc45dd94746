from django.contrib import admin
from .models import PurchaseQuote, PurchaseQuoteItem


class PurchaseQuoteItemInline(admin.TabularInline):
    model = PurchaseQuoteItem
    extra = 0
    fields = ('description', 'inventory_item', 'quantity', 'unit_price', 'total', 'notes')
    readonly_fields = ('total',)


@admin.register(PurchaseQuote)
class PurchaseQuoteAdmin(admin.ModelAdmin):
    list_display = ('quote_number', 'provider', 'work_order', 'quote_date', 'expiration_date', 'status', 'total')
    list_filter = ('status', 'provider')
    search_fields = ('quote_number', 'provider__name', 'work_order__code', 'notes')
    # Status muda pelas ações da API; totais vêm dos itens
    readonly_fields = ('id', 'status', 'subtotal', 'tax', 'total', 'decided_by', 'decided_at', 'created_at', 'updated_at')
    date_hierarchy = 'quote_date'
    inlines = [PurchaseQuoteItemInline]

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        form.instance.recalculate_totals()
