# vendas/api/v1/vendas_views.py

from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from commons.contexto import contexto_da_requisicao
from commons.respostas import Paginacao
from vendas.serializers.venda_serializers import (
    FiltrosVendaSerializer,
    VendaAtualizarSerializer,
    VendaCriarSerializer,
)
from vendas.services.vendas import venda_service


class VendaListCreateView(APIView):
    """
    GET  /vendas/  -> lista paginada (?pagina, ?limite, ?cliente_id,
                      ?data_inicio, ?data_fim)
    POST /vendas/  -> cria venda + itens + pagamento PENDING
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        filtros = FiltrosVendaSerializer(data=request.query_params)
        filtros.is_valid(raise_exception=True)

        resposta = venda_service.listar_vendas(
            contexto_da_requisicao(request),
            filtros.validated_data,
            Paginacao.da_query(request.query_params),
        )
        return resposta.para_response(request)

    def post(self, request):
        ser = VendaCriarSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        resposta = venda_service.criar_venda(ser.validated_data, contexto_da_requisicao(request))
        return resposta.para_response(request)


class VendaDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, venda_id):
        resposta = venda_service.buscar_venda(venda_id, contexto_da_requisicao(request))
        return resposta.para_response(request)

    def put(self, request, venda_id):
        ser = VendaAtualizarSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        resposta = venda_service.atualizar_venda(
            venda_id, ser.validated_data, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)

    def delete(self, request, venda_id):
        resposta = venda_service.excluir_venda(venda_id, contexto_da_requisicao(request))
        return resposta.para_response(request)
