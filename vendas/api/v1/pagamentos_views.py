# vendas/api/v1/pagamentos_views.py
"""
Endpoints de pagamentos, métodos e parcelas.

As views só validam o payload (serializers DRF), montam o contexto da
requisição e repassam ao service; a regra de negócio e o status HTTP
vêm da RespostaServico devolvida.
"""

from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from commons.contexto import contexto_da_requisicao
from commons.respostas import Paginacao
from vendas.serializers.pagamento_serializers import (
    FiltrosPagamentoSerializer,
    MetodoItemAtualizarSerializer,
    MetodoItemEntradaSerializer,
    PagamentoAtualizarSerializer,
    PagamentoCriarSerializer,
    PagarMetodoSerializer,
    PagarParcelaSerializer,
    ParcelaAtualizarSerializer,
    StatusPagamentoSerializer,
)
from vendas.services.pagamentos import (
    metodo_item_service,
    pagamento_service,
    pagamento_update_service,
    parcela_pagar_service,
    parcela_service,
)


class PagamentoListCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        filtros = FiltrosPagamentoSerializer(data=request.query_params)
        filtros.is_valid(raise_exception=True)

        resposta = pagamento_service.listar_pagamentos(
            contexto_da_requisicao(request),
            filtros.validated_data,
            Paginacao.da_query(request.query_params),
        )
        return resposta.para_response(request)

    def post(self, request):
        ser = PagamentoCriarSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        resposta = pagamento_service.criar_pagamento(
            ser.validated_data, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)


class PagamentoPorVendaView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, venda_id):
        resposta = pagamento_service.status_por_venda(venda_id, contexto_da_requisicao(request))
        return resposta.para_response(request)


class PagamentoDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pagamento_id):
        resposta = pagamento_service.buscar_pagamento(
            pagamento_id, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)

    def put(self, request, pagamento_id):
        ser = PagamentoAtualizarSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        resposta = pagamento_update_service.atualizar_pagamento(
            pagamento_id, ser.validated_data, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)

    def delete(self, request, pagamento_id):
        resposta = pagamento_service.excluir_pagamento(
            pagamento_id, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)


class PagamentoStatusView(APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request, pagamento_id):
        ser = StatusPagamentoSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        resposta = pagamento_update_service.atualizar_status(
            pagamento_id,
            ser.validated_data["status"],
            ser.validated_data.get("motivo", ""),
            contexto_da_requisicao(request),
        )
        return resposta.para_response(request)


class PagamentoValidarView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pagamento_id):
        resposta = pagamento_update_service.validar_pagamento(
            pagamento_id, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)


class PagamentoMetodosView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pagamento_id):
        ser = MetodoItemEntradaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        resposta = metodo_item_service.adicionar_metodo(
            pagamento_id, ser.validated_data, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)


class PagamentoParcelasView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pagamento_id):
        resposta = parcela_service.listar_parcelas_do_pagamento(
            pagamento_id, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)


class MetodoItemDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, metodo_id):
        ser = MetodoItemAtualizarSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        resposta = metodo_item_service.atualizar_metodo(
            metodo_id, ser.validated_data, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)

    def delete(self, request, metodo_id):
        resposta = metodo_item_service.remover_metodo(metodo_id, contexto_da_requisicao(request))
        return resposta.para_response(request)


class MetodoItemPagarView(APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request, metodo_id):
        ser = PagarMetodoSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        resposta = metodo_item_service.pagar_metodo_item(
            metodo_id, ser.validated_data, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)


class ParcelasVencidasView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resposta = parcela_service.listar_parcelas_vencidas(
            contexto_da_requisicao(request),
            Paginacao.da_query(request.query_params),
        )
        return resposta.para_response(request)


class ParcelaDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, parcela_id):
        resposta = parcela_service.buscar_parcela(parcela_id, contexto_da_requisicao(request))
        return resposta.para_response(request)

    def put(self, request, parcela_id):
        ser = ParcelaAtualizarSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        resposta = parcela_service.atualizar_parcela(
            parcela_id, ser.validated_data, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)


class ParcelaPagarView(APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request, parcela_id):
        ser = PagarParcelaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        resposta = parcela_pagar_service.pagar_parcela(
            parcela_id, ser.validated_data, contexto_da_requisicao(request)
        )
        return resposta.para_response(request)
