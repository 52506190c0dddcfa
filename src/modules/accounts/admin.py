from django.contrib import admin

from modules.accounts.models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "customer_id", "created_at")
    list_filter = ("role",)
    search_fields = ("user__username", "customer_id")
