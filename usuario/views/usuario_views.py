import logging

from django.contrib.auth import authenticate
from django.utils import timezone
from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
    throttle_classes,
)
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from usuario.serializers import LoginSerializer

logger = logging.getLogger(__name__)


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def login(request):
    ser = LoginSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    data = ser.validated_data

    user = authenticate(username=data["username"], password=data["password"])
    if not user:
        logger.info(
            "login_negado",
            extra={"event": "login_negado", "username": data["username"]},
        )
        return Response({"code": "AUTH_1001", "message": "Credenciais inválidas"}, status=401)

    filiais = [str(f) for f in user.filiais_ids()]
    filial_id = data.get("filial_id")

    if filial_id is not None:
        # Checagem: usuário possui acesso à filial informada?
        if not user.is_superuser and str(filial_id) not in filiais:
            return Response(
                {"code": "AUTH_1006", "message": "Usuário não autorizado na filial informada"},
                status=403,
            )
        filial_id = str(filial_id)
    elif len(filiais) == 1:
        filial_id = filiais[0]
    elif not filiais and not user.is_superuser:
        return Response(
            {"code": "AUTH_1007", "message": "Usuário sem filial vinculada"},
            status=403,
        )

    refresh = RefreshToken.for_user(user)
    # claims
    refresh["papel"] = user.papel
    refresh["filial_id"] = filial_id

    access = refresh.access_token
    access["iat_server"] = int(timezone.now().timestamp())

    logger.info(
        "login_ok",
        extra={"event": "login_ok", "user_id": user.id, "filial_id": filial_id},
    )

    return Response({
        "access": str(access),
        "refresh": str(refresh),
        "papel": user.papel,
        "filial_id": filial_id,
        "filiais": filiais,
    })


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([])
def refresh(request):
    ser = TokenRefreshSerializer(data=request.data)
    if not ser.is_valid():
        return Response({"code": "AUTH_1011", "message": "Refresh token inválido ou expirado."}, status=401)
    return Response(ser.validated_data)
