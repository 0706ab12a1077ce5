import uuid

from django.core.validators import MinLengthValidator
from django.db import models

from commons.models import BaseModel


class Cliente(BaseModel):
    """
    Cliente da ótica. CPF é opcional (venda balcão), mas único por filial
    quando informado.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    filial = models.ForeignKey(
        "filial.Filial",
        on_delete=models.PROTECT,
        related_name="clientes",
    )

    nome = models.CharField(max_length=120, db_index=True)
    cpf = models.CharField(
        max_length=11,
        blank=True,
        null=True,
        validators=[MinLengthValidator(11)],
        help_text="CPF somente números.",
    )
    email = models.EmailField(blank=True, default="")
    telefone = models.CharField(max_length=20, blank=True, default="")
    data_nascimento = models.DateField(null=True, blank=True)
    endereco = models.CharField(max_length=255, blank=True, default="")
    observacoes = models.TextField(blank=True, default="")

    class Meta:
        verbose_name = "Cliente"
        verbose_name_plural = "Clientes"
        ordering = ["nome"]
        constraints = [
            models.UniqueConstraint(
                fields=["filial", "cpf"],
                condition=models.Q(ativo=True),
                name="uniq_cliente_cpf_por_filial",
            ),
        ]

    def __str__(self):
        return self.nome
