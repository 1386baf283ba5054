RH, MANAGER = 'RH', 'MANAGER'

ROLE_CHOICES = (
    (RH, 'Recursos Humanos'),
    (MANAGER, 'Manager'),
)
