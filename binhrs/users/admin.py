from django.contrib import admin

from binhrs.users.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    search_fields = ('email', 'full_name')
    list_display = ('email', 'full_name', 'role', 'is_active')
    list_filter = ('role', 'is_active')
    exclude = ('password',)
