import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from salon.core.utils import create_audit_log
from .filters import PaymentFilter
from .models import Payment
from .serializers import PaymentSerializer

logger = logging.getLogger('salon.payments')


def _payment_queryset():
    return Payment.objects.select_related('client', 'package').prefetch_related('lines__professional')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def payment_list_create(request):
    """List payments, newest first, or register a new payment"""
    if request.method == 'GET':
        filterset = PaymentFilter(request.query_params, queryset=_payment_queryset().order_by('-date', '-time', '-id'))
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        serializer = PaymentSerializer(filterset.qs, many=True)
        return Response(serializer.data)
    else:
        serializer = PaymentSerializer(data=request.data)
        if serializer.is_valid():
            payment = serializer.save()
            logger.info(
                f"Payment {payment.id} of R$ {payment.value} ({payment.lines.count()} lines) "
                f"for client {payment.client_id} created by {request.user.username}"
            )
            create_audit_log(
                request, 'create', 'Payment', payment.id,
                changes={'value': str(payment.value), 'payment_method': payment.payment_method},
                object_name=str(payment)
            )
            return Response(PaymentSerializer(_payment_queryset().get(pk=payment.pk)).data, status=status.HTTP_201_CREATED)
        logger.warning(f"Rejected payment from {request.user.username}: {serializer.errors}")
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def payment_detail(request, pk):
    """Retrieve, update or delete a payment with its lines"""
    payment = get_object_or_404(_payment_queryset(), pk=pk)

    if request.method == 'GET':
        serializer = PaymentSerializer(payment)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        old_value = payment.value
        serializer = PaymentSerializer(payment, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            payment = serializer.save()
            logger.info(f"Payment {payment.id} updated by {request.user.username}: R$ {old_value} -> R$ {payment.value}")
            create_audit_log(
                request, 'update', 'Payment', payment.id,
                changes={'value': {'old': str(old_value), 'new': str(payment.value)}},
                object_name=str(payment)
            )
            return Response(PaymentSerializer(_payment_queryset().get(pk=payment.pk)).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        object_name = str(payment)
        payment.delete()
        logger.info(f"Payment {pk} deleted by {request.user.username}")
        create_audit_log(request, 'delete', 'Payment', pk, object_name=object_name)
        return Response(status=status.HTTP_204_NO_CONTENT)
