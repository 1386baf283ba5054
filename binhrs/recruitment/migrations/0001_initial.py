import binhrs.core.utils.common
import django.core.validators
import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models

DOC_TYPE_CHOICES = [
    ('SOLICITUD_EMPLEO', 'Solicitud de empleo'), ('CV', 'Currículum vitae'),
    ('ACTA_NACIMIENTO', 'Acta de nacimiento'), ('TITULO_O_CERTIFICADO', 'Título o certificado'),
    ('CEDULA', 'Cédula profesional'), ('LICENCIA_TIPO_C', 'Licencia tipo C'), ('INE', 'INE'),
    ('CURP', 'CURP'), ('RFC', 'RFC'), ('NSS', 'NSS'),
    ('COMPROBANTE_DOMICILIO', 'Comprobante de domicilio'),
    ('CERTIFICADO_MEDICO', 'Certificado médico'),
    ('CARTAS_RECOMENDACION', 'Cartas de recomendación'),
]
DOC_PHASE_CHOICES = [('NECESARIO', 'Necesario'), ('DESPUES', 'Después')]
QUESTION_BANK_KIND_CHOICES = [
    ('ADMINISTRATIVO', 'Administrativo'), ('OPERATIVO', 'Operativo'),
    ('OPERADOR_UNIDADES', 'Operador de unidades'), ('GUARDIA_SEGURIDAD', 'Guardia de seguridad'),
    ('AUX_LIMPIEZA_UNIDADES', 'Auxiliar de limpieza de unidades'), ('JEFE_PATIO', 'Jefe de patio'),
    ('AUXILIAR_PATIO', 'Auxiliar de patio'), ('TECNICOS', 'Técnicos'),
]
STATUS_CHOICES = [
    ('RevisionDeDocumentos', 'Revisión de documentos'), ('EntrevistaConRH', 'Entrevista con RH'),
    ('EntrevistaConManager', 'Entrevista con Manager'), ('Evaluando', 'Evaluando'),
    ('Aceptado', 'Aceptado'), ('Rechazado', 'Rechazado'),
]
CRITERION_CHOICES = [
    (1, 'Formación académica'), (2, 'Experiencia laboral específica'),
    (3, 'Conocimiento técnico del área'), (4, 'Habilidades técnicas'),
    (5, 'Capacidad de aprendizaje'), (6, 'Resultados y logros previos'),
    (7, 'Organización y planeación'), (8, 'Cumplimiento de requisitos del puesto'),
    (9, 'Comunicación'), (10, 'Trabajo en equipo'), (11, 'Adaptabilidad'),
    (12, 'Orientación al servicio'), (13, 'Manejo de conflictos'),
    (14, 'Actitud y motivación'), (15, 'Puntualidad y disciplina'),
    (16, 'Presentación personal'),
]
AUDIT_ACTION_CHOICES = [
    (action, action.replace('_', ' ').title()) for action in (
        'APPLICATION_CREATE', 'DOC_UPLOAD', 'STATUS_QUERY',
        'INTERVIEW_RH_SCHEDULED', 'INTERVIEW_RH_START',
        'INTERVIEW_RH_SAVE_DRAFT', 'INTERVIEW_RH_FINALIZE',
        'MANAGER_SCHEDULE_SET', 'MANAGER_SCHEDULE_UPDATE', 'MANAGER_SCORE_SAVE',
        'EVALUATION_START', 'EVALUATION_SAVE_SCORES', 'EVALUATION_SAVE_SUMMARY',
        'EVALUATION_FINALIZE_ACCEPT', 'EVALUATION_FINALIZE_REJECT',
    )
]


def id_field():
    return models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')


def timestamps():
    return [
        ('created_at', models.DateTimeField(auto_now_add=True)),
        ('modified_at', models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Candidate',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('email', models.EmailField(max_length=255, unique=True, verbose_name='candidate email')),
                ('full_name', models.CharField(max_length=255)),
                ('phone', models.CharField(blank=True, max_length=30)),
            ],
            options={
                'ordering': ('-created_at', '-modified_at'),
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='FolioSequence',
            fields=[
                ('id', id_field()),
                ('year', models.PositiveSmallIntegerField(unique=True)),
                ('last_value', models.PositiveIntegerField(default=0)),
            ],
        ),
        migrations.CreateModel(
            name='Vacancy',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('position', models.CharField(max_length=255)),
                ('vacancy_type', models.CharField(choices=[('ADMINISTRATIVO', 'Administrativo'), ('OPERATIVO', 'Operativo')], default='ADMINISTRATIVO', max_length=20)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('question_bank_kind', models.CharField(blank=True, choices=QUESTION_BANK_KIND_CHOICES, max_length=30)),
                ('manager', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='managed_vacancies', to=settings.AUTH_USER_MODEL)),
                ('modified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recruitment_vacancy_modified', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'vacancies',
                'ordering': ('-created_at',),
            },
        ),
        migrations.CreateModel(
            name='VacancyRequiredDocument',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('doc_type', models.CharField(choices=DOC_TYPE_CHOICES, max_length=30)),
                ('phase', models.CharField(choices=DOC_PHASE_CHOICES, max_length=10)),
                ('vacancy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='required_documents', to='recruitment.vacancy')),
            ],
            options={
                'unique_together': {('vacancy', 'doc_type', 'phase')},
            },
        ),
        migrations.CreateModel(
            name='Application',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('folio', models.CharField(editable=False, max_length=20, unique=True)),
                ('status', models.CharField(choices=STATUS_CHOICES, db_index=True, default='RevisionDeDocumentos', max_length=30)),
                ('rh_interview_at', models.DateTimeField(blank=True, null=True)),
                ('rh_interview_location', models.CharField(blank=True, max_length=255)),
                ('manager_interview_at', models.DateTimeField(blank=True, null=True)),
                ('manager_interview_location', models.CharField(blank=True, max_length=255)),
                ('candidate', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='applications', to='recruitment.candidate')),
                ('vacancy', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='applications', to='recruitment.vacancy')),
            ],
            options={
                'ordering': ('-created_at',),
                'unique_together': {('vacancy', 'candidate')},
            },
        ),
        migrations.CreateModel(
            name='ApplicationDocument',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('doc_type', models.CharField(choices=DOC_TYPE_CHOICES, max_length=30)),
                ('phase', models.CharField(choices=DOC_PHASE_CHOICES, max_length=10)),
                ('version', models.PositiveIntegerField()),
                ('attachment', models.FileField(max_length=255, upload_to=binhrs.core.utils.common.get_upload_path)),
                ('filename', models.CharField(blank=True, max_length=255)),
                ('application', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='documents', to='recruitment.application')),
            ],
            options={
                'ordering': ('doc_type', 'version'),
                'unique_together': {('application', 'doc_type', 'version')},
            },
        ),
        migrations.CreateModel(
            name='DocumentUpload',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('upload_id', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('doc_type', models.CharField(choices=DOC_TYPE_CHOICES, max_length=30)),
                ('filename', models.CharField(max_length=255)),
                ('mimetype', models.CharField(blank=True, max_length=100)),
                ('size', models.PositiveIntegerField(default=0)),
                ('storage_path', models.CharField(max_length=255)),
                ('expected_version', models.PositiveIntegerField()),
                ('expires_at', models.DateTimeField()),
                ('finalized_at', models.DateTimeField(blank=True, null=True)),
                ('application', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='document_uploads', to='recruitment.application')),
                ('document', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='upload_session', to='recruitment.applicationdocument')),
            ],
            options={
                'ordering': ('-created_at', '-modified_at'),
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='QuestionBank',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('kind', models.CharField(choices=QUESTION_BANK_KIND_CHOICES, max_length=30, unique=True)),
                ('name', models.CharField(blank=True, max_length=255)),
            ],
            options={
                'ordering': ('-created_at', '-modified_at'),
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='QuestionBankVersion',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('version', models.PositiveIntegerField()),
                ('is_active', models.BooleanField(default=False)),
                ('bank', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='versions', to='recruitment.questionbank')),
                ('imported_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ('bank', '-version'),
                'unique_together': {('bank', 'version')},
            },
        ),
        migrations.AddConstraint(
            model_name='questionbankversion',
            constraint=models.UniqueConstraint(condition=models.Q(('is_active', True)), fields=('bank',), name='unique_active_version_per_bank'),
        ),
        migrations.CreateModel(
            name='Question',
            fields=[
                ('id', id_field()),
                ('ord', models.PositiveIntegerField()),
                ('text', models.TextField()),
                ('is_required', models.BooleanField(default=True)),
                ('bank_version', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='recruitment.questionbankversion')),
            ],
            options={
                'ordering': ('ord',),
                'unique_together': {('bank_version', 'ord')},
            },
        ),
        migrations.CreateModel(
            name='RHInterview',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('started_at', models.DateTimeField()),
                ('finished_at', models.DateTimeField(blank=True, null=True)),
                ('application', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='rh_interview', to='recruitment.application')),
                ('bank_version', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='rh_interviews', to='recruitment.questionbankversion')),
                ('interviewer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='rh_interviews', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ('-created_at', '-modified_at'),
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='RHInterviewAnswer',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('answer', models.TextField(blank=True)),
                ('interview', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='answers', to='recruitment.rhinterview')),
                ('question', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='recruitment.question')),
            ],
            options={
                'ordering': ('question__ord',),
                'unique_together': {('interview', 'question')},
            },
        ),
        migrations.CreateModel(
            name='RHInterviewExtraQuestion',
            fields=[
                ('id', id_field()),
                ('ord', models.PositiveIntegerField()),
                ('question', models.TextField()),
                ('answer', models.TextField(blank=True)),
                ('interview', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='extra_questions', to='recruitment.rhinterview')),
            ],
            options={
                'ordering': ('ord',),
            },
        ),
        migrations.CreateModel(
            name='ManagerInterview',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('score', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('notes', models.TextField(blank=True)),
                ('application', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='manager_interview', to='recruitment.application')),
                ('modified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recruitment_managerinterview_modified', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ('-created_at', '-modified_at'),
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='EvaluationScore',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('criterion', models.PositiveSmallIntegerField(choices=CRITERION_CHOICES)),
                ('score', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('application', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='evaluation_scores', to='recruitment.application')),
            ],
            options={
                'ordering': ('criterion',),
                'unique_together': {('application', 'criterion')},
            },
        ),
        migrations.CreateModel(
            name='EvaluationSummary',
            fields=[
                ('id', id_field()),
                *timestamps(),
                ('factors_for', models.TextField(blank=True)),
                ('factors_against', models.TextField(blank=True)),
                ('conclusion', models.TextField(blank=True)),
                ('references_laborales', models.TextField(blank=True)),
                ('total', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('application', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='evaluation_summary', to='recruitment.application')),
                ('modified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recruitment_evaluationsummary_modified', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ('-created_at', '-modified_at'),
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', id_field()),
                ('action', models.CharField(choices=AUDIT_ACTION_CHOICES, db_index=True, max_length=40)),
                ('from_status', models.CharField(blank=True, max_length=30)),
                ('to_status', models.CharField(blank=True, max_length=30)),
                ('note', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recruitment_audit_logs', to=settings.AUTH_USER_MODEL)),
                ('application', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='audit_logs', to='recruitment.application')),
            ],
            options={
                'ordering': ('created_at', 'id'),
            },
        ),
    ]
