from django.contrib import admin

from experiences.models import Booking, Experience, PromoCode, Slot


class SlotInline(admin.TabularInline):
    model = Slot
    extra = 1


@admin.register(Experience)
class ExperienceAdmin(admin.ModelAdmin):
    list_display = ["name", "location", "price", "created_at"]
    search_fields = ["name", "location"]
    inlines = [SlotInline]


@admin.register(Slot)
class SlotAdmin(admin.ModelAdmin):
    list_display = ["experience", "date", "time", "capacity", "booked"]
    list_filter = ["experience", "date"]


@admin.register(PromoCode)
class PromoCodeAdmin(admin.ModelAdmin):
    list_display = ["code", "discount_type", "discount_value", "active"]
    list_filter = ["discount_type", "active"]
    search_fields = ["code"]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["booking_ref", "full_name", "email", "slot", "quantity", "total"]
    search_fields = ["booking_ref", "email", "full_name"]
    list_filter = ["slot__experience"]

    def has_change_permission(self, request, obj=None):
        return False
