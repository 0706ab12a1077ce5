from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    # username/email padrões do Django
    class Papel(models.TextChoices):
        ADMIN = "ADMIN", "Administrador"
        MANAGER = "MANAGER", "Gerente"
        EMPLOYEE = "EMPLOYEE", "Funcionário"

    papel = models.CharField(
        max_length=10,
        choices=Papel.choices,
        default=Papel.EMPLOYEE,
    )

    def filiais_ids(self):
        return list(self.userfilial_set.values_list("filial_id", flat=True))


class UserFilial(models.Model):
    """
    Vínculo usuário x filial. A filial vive no mesmo schema do tenant,
    mas é referenciada por UUID para não acoplar os apps.
    """

    user = models.ForeignKey(User, on_delete=models.CASCADE)
    filial_id = models.UUIDField()

    class Meta:
        unique_together = ("user", "filial_id")
        verbose_name = "Vínculo de Usuário com Filial"
        verbose_name_plural = "Vínculos de Usuários com Filiais"

    def __str__(self):
        return f"{self.user_id} -> {self.filial_id}"
