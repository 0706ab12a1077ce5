import uuid

from django.db import models

from commons.models import BaseModel


def _campo_grau(**kwargs):
    # valores de refração chegam como texto ("+1.25", "-0.50", "180")
    return models.CharField(max_length=10, blank=True, default="", **kwargs)


class Receita(BaseModel):
    """
    Receita oftalmológica de um cliente.

    OD = olho direito, OE = olho esquerdo. DNP = distância naso-pupilar.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    filial = models.ForeignKey(
        "filial.Filial",
        on_delete=models.PROTECT,
        related_name="receitas",
    )
    cliente = models.ForeignKey(
        "clientes.Cliente",
        on_delete=models.PROTECT,
        related_name="receitas",
    )

    data_receita = models.DateField()
    nome_medico = models.CharField(max_length=120, blank=True, default="")
    crm = models.CharField(max_length=20, blank=True, default="")

    od_esferico = _campo_grau()
    od_cilindrico = _campo_grau()
    od_eixo = _campo_grau()
    od_dnp = _campo_grau()

    oe_esferico = _campo_grau()
    oe_cilindrico = _campo_grau()
    oe_eixo = _campo_grau()
    oe_dnp = _campo_grau()

    adicao_od = _campo_grau()
    adicao_oe = _campo_grau()
    centro_otico_od = _campo_grau()
    centro_otico_oe = _campo_grau()

    observacoes = models.TextField(blank=True, default="")

    class Meta:
        verbose_name = "Receita"
        verbose_name_plural = "Receitas"
        ordering = ["-data_receita", "-created_at"]

    def __str__(self):
        return f"Receita {self.data_receita} - {self.cliente_id}"
