import logging
from datetime import datetime, timezone

from django.db import DatabaseError, connection
from django.http import JsonResponse
from django_tenants.utils import get_tenant_model

logger = logging.getLogger(__name__)


def liveness(request):
    return JsonResponse({"ok": True})


def readiness(request):
    try:
        with connection.cursor() as cur:
            cur.execute("SELECT 1")
            cur.fetchone()
        tenants_inativos = get_tenant_model().objects.filter(ativo=False).count()
    except DatabaseError as e:
        logger.warning("readiness_db_indisponivel", extra={"erro": str(e)})
        return JsonResponse({"ok": False, "error": str(e)}, status=503)
    return JsonResponse({"ok": True, "tenants_inativos": tenants_inativos})


def time_now(request):
    now = datetime.now(timezone.utc).astimezone()
    return JsonResponse({"now": now.isoformat()})
