from django.contrib import admin

from binhrs.recruitment.models import (
    Candidate,
    Vacancy,
    VacancyRequiredDocument,
    Application,
    ApplicationDocument,
    QuestionBank,
    QuestionBankVersion,
    Question,
    AuditLog
)


class VacancyRequiredDocumentInline(admin.TabularInline):
    model = VacancyRequiredDocument
    extra = 0


@admin.register(Vacancy)
class VacancyAdmin(admin.ModelAdmin):
    search_fields = ('position',)
    list_display = ('position', 'vacancy_type', 'manager', 'is_active')
    list_filter = ('vacancy_type', 'is_active')
    inlines = (VacancyRequiredDocumentInline,)


@admin.register(Candidate)
class CandidateAdmin(admin.ModelAdmin):
    search_fields = ('full_name', 'email')
    list_display = ('full_name', 'email', 'phone')


class ApplicationDocumentInline(admin.TabularInline):
    model = ApplicationDocument
    extra = 0
    readonly_fields = ('doc_type', 'phase', 'version', 'attachment', 'filename')
    can_delete = False


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    search_fields = ('folio', 'candidate__email', 'candidate__full_name')
    list_display = ('folio', 'candidate', 'vacancy', 'status', 'created_at')
    list_filter = ('status',)
    # status only moves through the lifecycle services
    readonly_fields = ('folio', 'status', 'candidate', 'vacancy')
    inlines = (ApplicationDocumentInline,)


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 0
    readonly_fields = ('ord', 'text', 'is_required')
    can_delete = False


@admin.register(QuestionBankVersion)
class QuestionBankVersionAdmin(admin.ModelAdmin):
    list_display = ('bank', 'version', 'is_active', 'created_at')
    list_filter = ('bank__kind', 'is_active')
    readonly_fields = ('bank', 'version', 'is_active', 'imported_by')
    inlines = (QuestionInline,)


admin.site.register(QuestionBank)


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('application', 'action', 'actor', 'from_status', 'to_status', 'created_at')
    list_filter = ('action',)
    search_fields = ('application__folio',)

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
