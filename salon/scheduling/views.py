import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from salon.core.search import MIN_QUERY_LENGTH
from salon.core.utils import create_audit_log, default_appointment_window
from .filters import AppointmentFilter
from .models import Appointment
from .serializers import AppointmentSerializer

logger = logging.getLogger('salon.scheduling')

SEARCH_RESULT_LIMIT = 20


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointment_list_create(request):
    """List appointments in a date window or create a new appointment"""
    if request.method == 'GET':
        params = request.query_params.copy()
        # Without explicit bounds the agenda shows today and the next two days
        if not params.get('start_date') and not params.get('end_date'):
            start, end = default_appointment_window()
            params['start_date'] = start.isoformat()
            params['end_date'] = end.isoformat()

        queryset = Appointment.objects.select_related('client', 'professional').order_by('date', 'time')
        filterset = AppointmentFilter(params, queryset=queryset)
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        serializer = AppointmentSerializer(filterset.qs, many=True)
        return Response(serializer.data)
    else:
        serializer = AppointmentSerializer(data=request.data)
        if serializer.is_valid():
            appointment = serializer.save()
            logger.info(f"Appointment {appointment.id} for client {appointment.client_id} on {appointment.date} created by {request.user.username}")
            create_audit_log(request, 'create', 'Appointment', appointment.id, object_name=str(appointment))
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def appointment_detail(request, pk):
    """Retrieve, update or delete an appointment"""
    appointment = get_object_or_404(Appointment.objects.select_related('client', 'professional'), pk=pk)

    if request.method == 'GET':
        serializer = AppointmentSerializer(appointment)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = AppointmentSerializer(appointment, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'Appointment', appointment.id, changes=request.data, object_name=str(appointment))
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        object_name = str(appointment)
        appointment.delete()
        create_audit_log(request, 'delete', 'Appointment', pk, object_name=object_name)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def appointment_search(request):
    """Autocomplete appointments by client name, most recent first"""
    query = request.query_params.get('q', '').strip()
    if len(query) < MIN_QUERY_LENGTH:
        return Response([])
    queryset = Appointment.objects.select_related('client', 'professional').filter(
        client__name__icontains=query
    ).order_by('-date', '-time')[:SEARCH_RESULT_LIMIT]
    serializer = AppointmentSerializer(queryset, many=True)
    return Response(serializer.data)
