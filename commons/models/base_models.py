# commons/models/base_models.py

from django.conf import settings
from django.db import models


class BaseModel(models.Model):
    """
    Base abstrata com trilha de auditoria e exclusão lógica.

    - created_at / updated_at preenchidos automaticamente.
    - criado_por / atualizado_por: usuário responsável (opcional, pois
      rotinas internas também gravam registros).
    - ativo: exclusão lógica (nenhum cadastro de negócio é apagado fisicamente
      pela API).
    """

    ativo = models.BooleanField(default=True, db_index=True)

    criado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    atualizado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def carimbar_auditoria(self, usuario, *, atualizacao: bool = False) -> list[str]:
        """
        Registra o usuário responsável pela gravação.
        Retorna os campos alterados, para uso em save(update_fields=...).
        """
        usuario_id = getattr(usuario, "pk", None)
        if not atualizacao and self._state.adding:
            self.criado_por_id = usuario_id
        self.atualizado_por_id = usuario_id
        return ["atualizado_por", "updated_at"]
