from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import Account
from .models import Application
from .models import AccessToken
from .models import Status
from .models import PreviewCard


class AccountAdmin(UserAdmin):
    list_display = ('id', 'username', 'display_name', 'is_active', 'is_staff')
    fieldsets = UserAdmin.fieldsets + (
        ('Profile', {'fields': ('display_name', 'note')}),
    )

# Register Account with Django's default UserAdmin to enable password hashing in /admin
admin.site.register(Account, AccountAdmin)


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ('name', 'website', 'created_at')
    search_fields = ('name',)


@admin.register(AccessToken)
class AccessTokenAdmin(admin.ModelAdmin):
    list_display = ('account', 'application', 'scopes', 'created_at', 'expires_at', 'revoked_at')
    list_filter = ('application',)
    search_fields = ('account__username',)
    readonly_fields = ('token',)
    actions = ['revoke_tokens']

    @admin.action(description="Revoke selected tokens")
    def revoke_tokens(self, request, queryset):
        for token in queryset.filter(revoked_at__isnull=True):
            token.revoke()


@admin.register(Status)
class StatusAdmin(admin.ModelAdmin):
    list_display = ("id", "account", "visibility", "local_only", "thread_id", "created_at")
    search_fields = ("content", "spoiler_text", "account__username")
    list_filter = ("visibility", "local_only", "sensitive")
    raw_id_fields = ("thread", "in_reply_to_account")


@admin.register(PreviewCard)
class PreviewCardAdmin(admin.ModelAdmin):
    list_display = ('title', 'url', 'type', 'provider_name', 'created_at')
    search_fields = ('title', 'url')
    list_filter = ('type',)
    filter_horizontal = ('statuses',)
