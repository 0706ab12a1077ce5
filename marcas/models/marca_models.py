import uuid

from django.db import models

from commons.models import BaseModel


class Marca(BaseModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    filial = models.ForeignKey(
        "filial.Filial",
        on_delete=models.PROTECT,
        related_name="marcas",
    )
    nome = models.CharField(max_length=80)
    descricao = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        verbose_name = "Marca"
        verbose_name_plural = "Marcas"
        ordering = ["nome"]

    def __str__(self):
        return self.nome
