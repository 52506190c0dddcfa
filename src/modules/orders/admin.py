from django.contrib import admin

from modules.orders.models import Order, OrderStatusHistory


class OrderStatusHistoryInline(admin.TabularInline):
    model = OrderStatusHistory
    extra = 0
    can_delete = False
    readonly_fields = ("old_status", "new_status", "actor_role", "user", "notes", "created_at")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Read-only status: transitions must go through the API."""

    list_display = ("order_number", "customer_id", "status", "total_amount", "created_at")
    list_filter = ("status",)
    search_fields = ("order_number", "customer_id")
    readonly_fields = ("order_number", "status", "created_at", "updated_at", "deleted_at")
    inlines = [OrderStatusHistoryInline]
