import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404
from salon.core.utils import create_audit_log
from .filters import ProfessionalFilter
from .models import Professional
from .serializers import ProfessionalSerializer

logger = logging.getLogger('salon.professionals')


def _filtered_list(request, queryset):
    filterset = ProfessionalFilter(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
    serializer = ProfessionalSerializer(filterset.qs, many=True)
    return Response(serializer.data)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def professional_list_create(request):
    """List active professionals or create a new professional"""
    if request.method == 'GET':
        return _filtered_list(request, Professional.objects.filter(is_active=True))
    else:
        serializer = ProfessionalSerializer(data=request.data)
        if serializer.is_valid():
            professional = serializer.save()
            logger.info(f"Professional {professional.id} created by {request.user.username}")
            create_audit_log(request, 'create', 'Professional', professional.id, object_name=professional.name)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def professional_list_all_status(request):
    """List professionals regardless of active status"""
    return _filtered_list(request, Professional.objects.all())


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def professional_detail(request, pk):
    """Retrieve, update or delete a professional"""
    professional = get_object_or_404(Professional, pk=pk)

    if request.method == 'GET':
        serializer = ProfessionalSerializer(professional)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ProfessionalSerializer(professional, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'Professional', professional.id, changes=request.data, object_name=professional.name)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            professional.delete()
        except ProtectedError:
            logger.warning(f"Refused to delete professional {pk}: appointments or payment lines reference it")
            return Response(
                {'error': 'Profissional possui agendamentos ou pagamentos registrados; desative-o em vez de excluir'},
                status=status.HTTP_409_CONFLICT
            )
        create_audit_log(request, 'delete', 'Professional', pk, object_name=professional.name)
        return Response(status=status.HTTP_204_NO_CONTENT)
