import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404
from salon.core.utils import create_audit_log
from .filters import ServiceFilter, PackageFilter
from .models import Service, Package
from .serializers import ServiceSerializer, PackageSerializer

logger = logging.getLogger('salon.catalog')


def _filtered_list(request, filter_class, serializer_class, queryset):
    filterset = filter_class(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
    serializer = serializer_class(filterset.qs, many=True)
    return Response(serializer.data)


# Service views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def service_list_create(request):
    """List active services or create a new service"""
    if request.method == 'GET':
        return _filtered_list(request, ServiceFilter, ServiceSerializer, Service.objects.filter(is_active=True))
    else:
        serializer = ServiceSerializer(data=request.data)
        if serializer.is_valid():
            service = serializer.save()
            logger.info(f"Service {service.id} created by {request.user.username}")
            create_audit_log(request, 'create', 'Service', service.id, object_name=service.name)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def service_list_all_status(request):
    """List services regardless of active status"""
    return _filtered_list(request, ServiceFilter, ServiceSerializer, Service.objects.all())


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def service_detail(request, pk):
    """Retrieve, update or delete a service"""
    service = get_object_or_404(Service, pk=pk)

    if request.method == 'GET':
        serializer = ServiceSerializer(service)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ServiceSerializer(service, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'Service', service.id, changes=request.data, object_name=service.name)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            service.delete()
        except ProtectedError:
            logger.warning(f"Refused to delete service {pk}: packages include it")
            return Response(
                {'error': 'Serviço faz parte de um pacote e não pode ser excluído'},
                status=status.HTTP_409_CONFLICT
            )
        create_audit_log(request, 'delete', 'Service', pk, object_name=service.name)
        return Response(status=status.HTTP_204_NO_CONTENT)


# Package views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def package_list_create(request):
    """List active packages or create a new package"""
    if request.method == 'GET':
        queryset = Package.objects.filter(is_active=True).prefetch_related('items__service')
        return _filtered_list(request, PackageFilter, PackageSerializer, queryset)
    else:
        serializer = PackageSerializer(data=request.data)
        if serializer.is_valid():
            package = serializer.save()
            logger.info(f"Package {package.id} created with {package.items.count()} items by {request.user.username}")
            create_audit_log(request, 'create', 'Package', package.id, object_name=package.name)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def package_list_all_status(request):
    """List packages regardless of active status"""
    queryset = Package.objects.all().prefetch_related('items__service')
    return _filtered_list(request, PackageFilter, PackageSerializer, queryset)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def package_detail(request, pk):
    """Retrieve, update or delete a package"""
    package = get_object_or_404(Package, pk=pk)

    if request.method == 'GET':
        serializer = PackageSerializer(package)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = PackageSerializer(package, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'Package', package.id, changes=request.data, object_name=package.name)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        package.delete()
        create_audit_log(request, 'delete', 'Package', pk, object_name=package.name)
        return Response(status=status.HTTP_204_NO_CONTENT)
