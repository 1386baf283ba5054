(REVISION_DE_DOCUMENTOS, ENTREVISTA_CON_RH, ENTREVISTA_CON_MANAGER,
 EVALUANDO, ACEPTADO, RECHAZADO) = (
    'RevisionDeDocumentos', 'EntrevistaConRH',
    'EntrevistaConManager', 'Evaluando',
    'Aceptado', 'Rechazado'
)

APPLICATION_STATUS_CHOICES = [
    (REVISION_DE_DOCUMENTOS, 'Revisión de documentos'),
    (ENTREVISTA_CON_RH, 'Entrevista con RH'),
    (ENTREVISTA_CON_MANAGER, 'Entrevista con Manager'),
    (EVALUANDO, 'Evaluando'),
    (ACEPTADO, 'Aceptado'),
    (RECHAZADO, 'Rechazado'),
]

PIPELINE_STATUSES = (
    REVISION_DE_DOCUMENTOS, ENTREVISTA_CON_RH,
    ENTREVISTA_CON_MANAGER, EVALUANDO
)
TERMINAL_STATUSES = (ACEPTADO, RECHAZADO)
FINAL_STEP = 'Final'

ADMINISTRATIVO, OPERATIVO = 'ADMINISTRATIVO', 'OPERATIVO'
VACANCY_TYPE_CHOICES = (
    (ADMINISTRATIVO, 'Administrativo'),
    (OPERATIVO, 'Operativo'),
)

NECESARIO, DESPUES = 'NECESARIO', 'DESPUES'
DOC_PHASE_CHOICES = (
    (NECESARIO, 'Necesario'),
    (DESPUES, 'Después'),
)

(SOLICITUD_EMPLEO, CV, ACTA_NACIMIENTO, TITULO_O_CERTIFICADO, CEDULA,
 LICENCIA_TIPO_C, INE, CURP, RFC, NSS, COMPROBANTE_DOMICILIO,
 CERTIFICADO_MEDICO, CARTAS_RECOMENDACION) = (
    'SOLICITUD_EMPLEO', 'CV', 'ACTA_NACIMIENTO', 'TITULO_O_CERTIFICADO',
    'CEDULA', 'LICENCIA_TIPO_C', 'INE', 'CURP', 'RFC', 'NSS',
    'COMPROBANTE_DOMICILIO', 'CERTIFICADO_MEDICO', 'CARTAS_RECOMENDACION'
)

DOC_TYPE_CHOICES = (
    (SOLICITUD_EMPLEO, 'Solicitud de empleo'),
    (CV, 'Currículum vitae'),
    (ACTA_NACIMIENTO, 'Acta de nacimiento'),
    (TITULO_O_CERTIFICADO, 'Título o certificado'),
    (CEDULA, 'Cédula profesional'),
    (LICENCIA_TIPO_C, 'Licencia tipo C'),
    (INE, 'INE'),
    (CURP, 'CURP'),
    (RFC, 'RFC'),
    (NSS, 'NSS'),
    (COMPROBANTE_DOMICILIO, 'Comprobante de domicilio'),
    (CERTIFICADO_MEDICO, 'Certificado médico'),
    (CARTAS_RECOMENDACION, 'Cartas de recomendación'),
)
DOC_TYPES = [doc_type for doc_type, _ in DOC_TYPE_CHOICES]

(OPERADOR_UNIDADES, GUARDIA_SEGURIDAD, AUX_LIMPIEZA_UNIDADES, JEFE_PATIO,
 AUXILIAR_PATIO, TECNICOS) = (
    'OPERADOR_UNIDADES', 'GUARDIA_SEGURIDAD', 'AUX_LIMPIEZA_UNIDADES',
    'JEFE_PATIO', 'AUXILIAR_PATIO', 'TECNICOS'
)
QUESTION_BANK_KIND_CHOICES = (
    (ADMINISTRATIVO, 'Administrativo'),
    (OPERATIVO, 'Operativo'),
    (OPERADOR_UNIDADES, 'Operador de unidades'),
    (GUARDIA_SEGURIDAD, 'Guardia de seguridad'),
    (AUX_LIMPIEZA_UNIDADES, 'Auxiliar de limpieza de unidades'),
    (JEFE_PATIO, 'Jefe de patio'),
    (AUXILIAR_PATIO, 'Auxiliar de patio'),
    (TECNICOS, 'Técnicos'),
)

# evaluation criteria, fixed catalog: (id, group, ord, label)
FORMACION_Y_EXPERIENCIA, AREA_SOCIAL = 'FORMACION_Y_EXPERIENCIA', 'AREA_SOCIAL'
CRITERION_GROUP_CHOICES = (
    (FORMACION_Y_EXPERIENCIA, 'Formación y experiencia'),
    (AREA_SOCIAL, 'Área social'),
)
EVALUATION_CRITERIA = (
    (1, FORMACION_Y_EXPERIENCIA, 1, 'Formación académica'),
    (2, FORMACION_Y_EXPERIENCIA, 2, 'Experiencia laboral específica'),
    (3, FORMACION_Y_EXPERIENCIA, 3, 'Conocimiento técnico del área'),
    (4, FORMACION_Y_EXPERIENCIA, 4, 'Habilidades técnicas'),
    (5, FORMACION_Y_EXPERIENCIA, 5, 'Capacidad de aprendizaje'),
    (6, FORMACION_Y_EXPERIENCIA, 6, 'Resultados y logros previos'),
    (7, FORMACION_Y_EXPERIENCIA, 7, 'Organización y planeación'),
    (8, FORMACION_Y_EXPERIENCIA, 8, 'Cumplimiento de requisitos del puesto'),
    (9, AREA_SOCIAL, 1, 'Comunicación'),
    (10, AREA_SOCIAL, 2, 'Trabajo en equipo'),
    (11, AREA_SOCIAL, 3, 'Adaptabilidad'),
    (12, AREA_SOCIAL, 4, 'Orientación al servicio'),
    (13, AREA_SOCIAL, 5, 'Manejo de conflictos'),
    (14, AREA_SOCIAL, 6, 'Actitud y motivación'),
    (15, AREA_SOCIAL, 7, 'Puntualidad y disciplina'),
    (16, AREA_SOCIAL, 8, 'Presentación personal'),
)
CRITERION_IDS = [criterion[0] for criterion in EVALUATION_CRITERIA]
CRITERION_CHOICES = [(criterion[0], criterion[3]) for criterion in EVALUATION_CRITERIA]

MIN_CRITERION_SCORE, MAX_CRITERION_SCORE = 1, 5
MIN_MANAGER_SCORE, MAX_MANAGER_SCORE = 0, 100

# audit actions
APPLICATION_CREATE = 'APPLICATION_CREATE'
DOC_UPLOAD = 'DOC_UPLOAD'
STATUS_QUERY = 'STATUS_QUERY'
INTERVIEW_RH_SCHEDULED = 'INTERVIEW_RH_SCHEDULED'
INTERVIEW_RH_START = 'INTERVIEW_RH_START'
INTERVIEW_RH_SAVE_DRAFT = 'INTERVIEW_RH_SAVE_DRAFT'
INTERVIEW_RH_FINALIZE = 'INTERVIEW_RH_FINALIZE'
MANAGER_SCHEDULE_SET = 'MANAGER_SCHEDULE_SET'
MANAGER_SCHEDULE_UPDATE = 'MANAGER_SCHEDULE_UPDATE'
MANAGER_SCORE_SAVE = 'MANAGER_SCORE_SAVE'
EVALUATION_START = 'EVALUATION_START'
EVALUATION_SAVE_SCORES = 'EVALUATION_SAVE_SCORES'
EVALUATION_SAVE_SUMMARY = 'EVALUATION_SAVE_SUMMARY'
EVALUATION_FINALIZE_ACCEPT = 'EVALUATION_FINALIZE_ACCEPT'
EVALUATION_FINALIZE_REJECT = 'EVALUATION_FINALIZE_REJECT'

AUDIT_ACTION_CHOICES = [
    (action, action.replace('_', ' ').title()) for action in (
        APPLICATION_CREATE, DOC_UPLOAD, STATUS_QUERY,
        INTERVIEW_RH_SCHEDULED, INTERVIEW_RH_START,
        INTERVIEW_RH_SAVE_DRAFT, INTERVIEW_RH_FINALIZE,
        MANAGER_SCHEDULE_SET, MANAGER_SCHEDULE_UPDATE, MANAGER_SCORE_SAVE,
        EVALUATION_START, EVALUATION_SAVE_SCORES, EVALUATION_SAVE_SUMMARY,
        EVALUATION_FINALIZE_ACCEPT, EVALUATION_FINALIZE_REJECT,
    )
]

FOLIO_PREFIX = 'BIN'
MAX_FOLIO_SEQUENCE = 99999
