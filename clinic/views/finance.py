"""
Bill and income endpoints.

Both resources expose the same contract:

* ``GET    /api/<resource>``       list, newest first
* ``POST   /api/<resource>``       create (name, amount, date, category)
* ``PUT    /api/<resource>``       update, record ``id`` in the body
* ``GET    /api/<resource>/<id>``  detail
* ``PUT    /api/<resource>/<id>``  update
* ``DELETE /api/<resource>/<id>``  delete

Records belong to the caller's tenant and only administrators and
owners may touch them.  Input problems answer 400, unknown records 404
and anything unexpected a generic 500, always as ``{"error": ...}``.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import Bill, Income
from clinic.permissions import HasTenant, IsFinanceRole
from clinic.serializers.finance import BillSerializer, IncomeSerializer, SummaryQuerySerializer
from clinic.services import finance

logger = logging.getLogger(__name__)

FINANCE_PERMISSIONS = [IsAuthenticated, IsFinanceRole, HasTenant]


def _record_views(model, serializer_class, singular: str, plural: str):
    """Build the collection and detail views for one record model."""
    base = f'/api/{plural}'

    def _not_found():
        return Response({'error': f'{singular.capitalize()} not found'}, status=status.HTTP_404_NOT_FOUND)

    def _update(request, pk):
        s = serializer_class(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        try:
            record = finance.get_record(model, request.user.tenant, pk)
            if record is None:
                return _not_found()
            finance.update_record(record, request.user, s.validated_data)
        except Exception:
            logger.exception('Error in PUT %s', base)
            return Response({'error': f'Failed to update {singular}'}, status=500)
        return Response(finance.serialize_record(record))

    @api_view(['GET', 'POST', 'PUT'])
    @permission_classes(FINANCE_PERMISSIONS)
    def collection(request):
        tenant = request.user.tenant
        if request.method == 'GET':
            try:
                records = finance.list_records(model, tenant)
            except Exception:
                logger.exception('Error in GET %s', base)
                return Response({'error': f'Failed to fetch {plural}'}, status=500)
            return Response(records)

        if request.method == 'PUT':
            pk = request.data.get('id')
            if not pk:
                return Response({'error': 'id is required'}, status=status.HTTP_400_BAD_REQUEST)
            try:
                pk = int(pk)
            except (TypeError, ValueError):
                return Response({'error': 'id must be an integer'}, status=status.HTTP_400_BAD_REQUEST)
            return _update(request, pk)

        # POST
        s = serializer_class(data=request.data)
        s.is_valid(raise_exception=True)
        try:
            record = finance.create_record(model, tenant, request.user, s.validated_data)
        except Exception:
            logger.exception('Error in POST %s', base)
            return Response({'error': f'Failed to create {singular}'}, status=500)
        return Response(finance.serialize_record(record), status=status.HTTP_201_CREATED)

    @api_view(['GET', 'PUT', 'DELETE'])
    @permission_classes(FINANCE_PERMISSIONS)
    def detail(request, pk: int):
        if request.method == 'PUT':
            return _update(request, pk)
        try:
            record = finance.get_record(model, request.user.tenant, pk)
            if record is None:
                return _not_found()
            if request.method == 'GET':
                return Response(finance.serialize_record(record))
            finance.delete_record(record, request.user)
        except Exception:
            logger.exception('Error in %s %s/%s', request.method, base, pk)
            action = 'fetch' if request.method == 'GET' else 'delete'
            return Response({'error': f'Failed to {action} {singular}'}, status=500)
        return Response({'ok': True})

    return collection, detail


bills, bill_detail = _record_views(Bill, BillSerializer, 'bill', 'bills')
income, income_detail = _record_views(Income, IncomeSerializer, 'income entry', 'income')


@api_view(['GET'])
@permission_classes(FINANCE_PERMISSIONS)
def finance_summary(request):
    """Income, expenses and balance for the financial dashboard."""
    q = SummaryQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    try:
        data = finance.summarize(
            request.user.tenant,
            month=q.validated_data.get('month'),
            year=q.validated_data.get('year'),
        )
    except Exception:
        logger.exception('Error in GET /api/finance/summary')
        return Response({'error': 'Failed to build financial summary'}, status=500)
    return Response(data)
