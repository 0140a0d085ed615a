from django.contrib import admin
from django.contrib.auth import get_user_model
from .models import UserProfile


User = get_user_model()


class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False
    fields = ("full_name", "mobile_number", "location", "role", "is_approved")


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("email", "username", "profile_role", "is_active", "date_joined")
    list_filter = ("is_active", "profile__role", "profile__is_approved")
    search_fields = ("email", "username", "profile__full_name")
    ordering = ("-date_joined",)
    inlines = [UserProfileInline]

    @admin.display(description="Role")
    def profile_role(self, obj):
        profile = getattr(obj, "profile", None)
        return profile.role if profile else "-"


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "full_name", "mobile_number", "role", "is_approved", "created_at")
    list_filter = ("role", "is_approved")
    search_fields = ("user__email", "full_name", "mobile_number")
    actions = ["approve_users"]

    @admin.action(description="Approve selected users")
    def approve_users(self, request, queryset):
        updated = queryset.update(is_approved=True)
        self.message_user(request, f"{updated} user(s) approved.")
