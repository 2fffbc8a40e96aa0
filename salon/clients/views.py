import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.core.paginator import Paginator
from django.db.models import Q, Value, ProtectedError
from django.db.models.functions import Concat, Coalesce
from django.shortcuts import get_object_or_404
from salon.core.search import MIN_QUERY_LENGTH
from salon.core.utils import create_audit_log
from .models import Client
from .serializers import ClientSerializer, ClientSearchSerializer

logger = logging.getLogger('salon.clients')

SEARCH_RESULT_LIMIT = 20


def search_clients(query, limit=SEARCH_RESULT_LIMIT):
    """Clients whose 'name phone' contains query; short queries match nothing"""
    if not query or len(query) < MIN_QUERY_LENGTH:
        return Client.objects.none()
    return Client.objects.annotate(
        search_text=Concat('name', Value(' '), Coalesce('phone', Value('')))
    ).filter(search_text__icontains=query).order_by('name')[:limit]


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def client_list_create(request):
    """List all clients or create a new client"""
    if request.method == 'GET':
        queryset = Client.objects.all().order_by('-created_at')
        search = request.query_params.get('search', None)
        if search:
            queryset = queryset.filter(Q(name__icontains=search) | Q(phone__icontains=search))

        page = request.query_params.get('page', None)
        if page is None:
            serializer = ClientSerializer(queryset, many=True)
            return Response(serializer.data)

        try:
            page = int(page)
            limit = int(request.query_params.get('limit', 50))
        except ValueError:
            return Response({'error': 'page e limit devem ser números inteiros'}, status=status.HTTP_400_BAD_REQUEST)
        limit = max(1, min(limit, 500))

        paginator = Paginator(queryset, limit)
        page_obj = paginator.get_page(page)
        serializer = ClientSerializer(page_obj, many=True)
        return Response({
            'results': serializer.data,
            'count': paginator.count,
            'next': page_obj.next_page_number() if page_obj.has_next() else None,
            'previous': page_obj.previous_page_number() if page_obj.has_previous() else None,
            'page': page_obj.number,
            'page_size': limit,
            'total_pages': paginator.num_pages,
        })
    else:
        serializer = ClientSerializer(data=request.data)
        if serializer.is_valid():
            client = serializer.save()
            logger.info(f"Client {client.id} created by {request.user.username}")
            create_audit_log(request, 'create', 'Client', client.id, object_name=client.name)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def client_detail(request, pk):
    """Retrieve, update or delete a client"""
    client = get_object_or_404(Client, pk=pk)

    if request.method == 'GET':
        serializer = ClientSerializer(client)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ClientSerializer(client, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'Client', client.id, changes=request.data, object_name=client.name)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            client.delete()
        except ProtectedError:
            logger.warning(f"Refused to delete client {pk}: payments reference it")
            return Response(
                {'error': 'Cliente possui pagamentos registrados e não pode ser excluído'},
                status=status.HTTP_409_CONFLICT
            )
        create_audit_log(request, 'delete', 'Client', pk, object_name=client.name)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def client_search(request):
    """Autocomplete clients by name or phone"""
    query = request.query_params.get('q', '').strip()
    serializer = ClientSearchSerializer(search_clients(query), many=True)
    return Response(serializer.data)
