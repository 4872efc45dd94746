from rest_framework import viewsets, mixins, filters, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend
from django.contrib.auth import authenticate, get_user_model, login, logout
from django.db import transaction
from django.db.models import Q
from drf_yasg.utils import no_body, swagger_auto_schema

from accounts.permissions import IsAdministratorOrReadOnly, IsSupervisorOrReadOnly
from clients.models import Client, ClientBranch
from diagnostics.models import Diagnostic
from employees.models import Employee, EmployeeType
from inventory.models import InventoryCategory, InventoryItem, InventoryMovement
from inventory.services import register_movement
from lifecycle import services
from lifecycle.exceptions import InvalidTransition
from maintenance.models import ScheduledMaintenance, ServiceCategory
from notifications.models import Notification
from notifications.services import mark_all_read
from provider.models import Provider, ProviderType
from purchasing import services as purchasing_services
from purchasing.models import PurchaseQuote, PurchaseQuoteItem, QuoteStatus
from reports.models import Report, ReportStatus
from vehicles.models import Vehicle, VehicleType
from vehicles.services import transfer_vehicle
from workorder.models import WorkOrder, WorkOrderEvidence, WorkOrderMaterial, WorkOrderTask
from workorder.services import approve_material
from workorderhistory.models import WorkOrderHistory

from .serializers import (
    UserSerializer, UserCreateSerializer, LoginSerializer,
    ClientSerializer, ClientBranchSerializer,
    VehicleTypeSerializer, VehicleSerializer,
    VehicleTransferSerializer, VehicleBranchHistorySerializer,
    EmployeeTypeSerializer, EmployeeSerializer,
    ProviderTypeSerializer, ProviderSerializer,
    InventoryCategorySerializer, InventoryItemSerializer, InventoryMovementSerializer,
    ServiceCategorySerializer, ScheduledMaintenanceSerializer, MaintenanceCompleteSerializer,
    ReportSerializer, ReportAssignSerializer,
    DiagnosticSerializer,
    WorkOrderSerializer, WorkOrderListSerializer,
    WorkOrderAdvanceSerializer, WorkOrderReopenSerializer,
    WorkOrderTaskSerializer, WorkOrderMaterialSerializer, WorkOrderEvidenceSerializer,
    WorkOrderHistorySerializer,
    PurchaseQuoteSerializer, PurchaseQuoteItemSerializer, PurchaseQuoteAdvanceSerializer,
    NotificationSerializer
)

User = get_user_model()


# ---------------------------------------------------------------------------
# Autenticação
# ---------------------------------------------------------------------------

class LoginView(APIView):
    """Login por e-mail e senha; abre a sessão Django."""
    authentication_classes = []
    permission_classes = [AllowAny]

    @swagger_auto_schema(request_body=LoginSerializer, responses={200: UserSerializer()})
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = authenticate(
            request,
            username=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
        if user is None or not user.is_active:
            return Response(
                {'error': 'invalid_credentials', 'detail': 'E-mail ou senha inválidos.'},
                status=status.HTTP_400_BAD_REQUEST
            )
        login(request, user)
        return Response(UserSerializer(user).data)


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        logout(request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class UserViewSet(viewsets.ModelViewSet):
    queryset = User.objects.select_related('employee_profile').all()
    serializer_class = UserSerializer
    permission_classes = [IsAdministratorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['role', 'is_active']
    search_fields = ['email', 'username', 'first_name', 'last_name']
    ordering_fields = ['email', 'date_joined']
    ordering = ['email']

    def get_serializer_class(self):
        if self.action == 'create':
            return UserCreateSerializer
        return UserSerializer

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated])
    def me(self, request):
        """Perfil do usuário autenticado"""
        serializer = UserSerializer(request.user)
        return Response(serializer.data)


# ---------------------------------------------------------------------------
# Cadastros da frota
# ---------------------------------------------------------------------------

class ClientViewSet(viewsets.ModelViewSet):
    queryset = Client.objects.prefetch_related('branches').all()
    serializer_class = ClientSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status']
    search_fields = ['name', 'company', 'email', 'phone']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']


class ClientBranchViewSet(viewsets.ModelViewSet):
    queryset = ClientBranch.objects.select_related('client').all()
    serializer_class = ClientBranchSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['client', 'is_active']
    search_fields = ['name', 'contact_name', 'client__name']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']


class VehicleTypeViewSet(viewsets.ModelViewSet):
    queryset = VehicleType.objects.all()
    serializer_class = VehicleTypeSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['name']


class VehicleViewSet(viewsets.ModelViewSet):
    queryset = Vehicle.objects.select_related('client', 'branch', 'vehicle_type').all()
    serializer_class = VehicleSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'client', 'branch', 'vehicle_type', 'fuel_type']
    search_fields = ['plate', 'economic_number', 'vin', 'brand', 'model']
    ordering_fields = ['plate', 'year', 'mileage', 'created_at']
    ordering = ['plate']

    @swagger_auto_schema(method='post', request_body=VehicleTransferSerializer, responses={200: VehicleSerializer()})
    @action(detail=True, methods=['post'])
    def transfer(self, request, pk=None):
        """Transfere o veículo para outra sucursal do mesmo cliente."""
        serializer = VehicleTransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vehicle, _entry = transfer_vehicle(
            pk,
            serializer.validated_data['to_branch_id'],
            serializer.validated_data['reason'],
            request.user,
        )
        return Response(VehicleSerializer(vehicle).data)

    @swagger_auto_schema(method='get', responses={200: VehicleBranchHistorySerializer(many=True)})
    @action(detail=True, methods=['get'], url_path='transfer-history')
    def transfer_history(self, request, pk=None):
        vehicle = self.get_object()
        entries = vehicle.branch_history.select_related('from_branch', 'to_branch', 'transferred_by')
        return Response(VehicleBranchHistorySerializer(entries, many=True).data)


class EmployeeTypeViewSet(viewsets.ModelViewSet):
    queryset = EmployeeType.objects.all()
    serializer_class = EmployeeTypeSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['name']


class EmployeeViewSet(viewsets.ModelViewSet):
    queryset = Employee.objects.select_related('employee_type', 'user').all()
    serializer_class = EmployeeSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['employee_type', 'is_active']
    search_fields = ['first_name', 'last_name', 'email', 'phone']
    ordering_fields = ['first_name', 'created_at']
    ordering = ['first_name', 'last_name']


class ProviderTypeViewSet(viewsets.ModelViewSet):
    queryset = ProviderType.objects.all()
    serializer_class = ProviderTypeSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['name']


class ProviderViewSet(viewsets.ModelViewSet):
    queryset = Provider.objects.select_related('provider_type').all()
    serializer_class = ProviderSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['provider_type', 'status']
    search_fields = ['name', 'email', 'phone']
    ordering_fields = ['name', 'rating', 'created_at']
    ordering = ['name']


# ---------------------------------------------------------------------------
# Estoque e manutenção programada
# ---------------------------------------------------------------------------

class InventoryCategoryViewSet(viewsets.ModelViewSet):
    queryset = InventoryCategory.objects.all()
    serializer_class = InventoryCategorySerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['name']


class InventoryItemViewSet(viewsets.ModelViewSet):
    queryset = InventoryItem.objects.select_related('category', 'provider').all()
    serializer_class = InventoryItemSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['category', 'provider']
    search_fields = ['name', 'part_number', 'location']
    ordering_fields = ['name', 'quantity', 'unit_price']
    ordering = ['name']


class InventoryMovementViewSet(mixins.CreateModelMixin,
                               mixins.RetrieveModelMixin,
                               mixins.ListModelMixin,
                               viewsets.GenericViewSet):
    """Movimentações são imutáveis; criar uma aplica o saldo no item."""
    queryset = InventoryMovement.objects.select_related('item', 'created_by').all()
    serializer_class = InventoryMovementSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['item', 'movement_type', 'created_by']
    search_fields = ['item__name', 'reference', 'notes']
    ordering_fields = ['created_at']
    ordering = ['-created_at']

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        movement = register_movement(
            data['item'],
            data['movement_type'],
            data['quantity'],
            request.user,
            reference=data.get('reference', ''),
            notes=data.get('notes', ''),
        )
        return Response(self.get_serializer(movement).data, status=status.HTTP_201_CREATED)


class ServiceCategoryViewSet(viewsets.ModelViewSet):
    queryset = ServiceCategory.objects.all()
    serializer_class = ServiceCategorySerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['active']
    search_fields = ['name']
    ordering = ['name']


class ScheduledMaintenanceViewSet(viewsets.ModelViewSet):
    queryset = ScheduledMaintenance.objects.select_related('vehicle', 'category').all()
    serializer_class = ScheduledMaintenanceSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['vehicle', 'category', 'frequency', 'status']
    search_fields = ['title', 'description', 'vehicle__plate']
    ordering_fields = ['next_due_date', 'created_at']
    ordering = ['next_due_date']

    @swagger_auto_schema(
        method='post',
        request_body=MaintenanceCompleteSerializer,
        responses={200: ScheduledMaintenanceSerializer()}
    )
    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        """Registra a execução e agenda a próxima ocorrência."""
        serializer = MaintenanceCompleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        maintenance = self.get_object()
        maintenance.complete(mileage=serializer.validated_data.get('mileage'))
        return Response(self.get_serializer(maintenance).data)


# ---------------------------------------------------------------------------
# Ciclo de manutenção
# ---------------------------------------------------------------------------

class ReportViewSet(mixins.CreateModelMixin,
                    mixins.RetrieveModelMixin,
                    mixins.UpdateModelMixin,
                    mixins.ListModelMixin,
                    viewsets.GenericViewSet):
    """
    Reportes de falha. Não há exclusão individual: o status só muda pelas
    ações assign/reject e pelo fluxo da ordem de trabalho.
    """
    queryset = Report.objects.select_related('vehicle', 'reported_by', 'assigned_to_employee').all()
    serializer_class = ReportSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'vehicle', 'assigned_to_employee', 'reported_by']
    search_fields = ['description', 'notes', 'vehicle__plate', 'vehicle__economic_number']
    ordering_fields = ['created_at', 'status']
    ordering = ['-created_at']

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        if user.can_supervise:
            return queryset
        # Técnicos e operadores veem o que reportaram ou o que lhes foi atribuído
        return queryset.filter(Q(reported_by=user) | Q(assigned_to_employee__user=user))

    def perform_create(self, serializer):
        serializer.save(reported_by=self.request.user)

    def perform_update(self, serializer):
        if serializer.instance.status == ReportStatus.RESOLVED:
            raise InvalidTransition('Reporte resolvido não pode ser alterado.', current_status=ReportStatus.RESOLVED)
        serializer.save()

    @swagger_auto_schema(method='post', request_body=ReportAssignSerializer, responses={200: ReportSerializer()})
    @action(detail=True, methods=['post'])
    def assign(self, request, pk=None):
        """Atribui o reporte a um funcionário (pending -> diagnostico)."""
        serializer = ReportAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report = services.assign_report(pk, serializer.validated_data['employee_id'], request.user)
        return Response(ReportSerializer(report).data)

    @swagger_auto_schema(method='post', request_body=no_body, responses={200: ReportSerializer()})
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """Devolve o reporte para pendente, descartando o diagnóstico aberto."""
        report = services.reject_report(pk, request.user)
        return Response(ReportSerializer(report).data)

    @swagger_auto_schema(method='post', request_body=no_body)
    @action(detail=False, methods=['post'])
    def clear(self, request):
        """Remove todos os reportes, diagnósticos e ordens de trabalho (admin)."""
        counts = services.clear_reports(request.user)
        return Response(counts)


class DiagnosticViewSet(mixins.CreateModelMixin,
                        mixins.RetrieveModelMixin,
                        mixins.UpdateModelMixin,
                        mixins.ListModelMixin,
                        viewsets.GenericViewSet):
    queryset = Diagnostic.objects.select_related(
        'report', 'report__vehicle', 'employee', 'approved_by'
    ).all()
    serializer_class = DiagnosticSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['report', 'employee', 'severity', 'requires_additional_tests']
    search_fields = ['diagnosis', 'recommendations', 'report__vehicle__plate']
    ordering_fields = ['created_at', 'estimated_cost']
    ordering = ['-created_at']

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        if user.can_supervise:
            return queryset
        return queryset.filter(Q(employee__user=user) | Q(report__reported_by=user))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        fields = dict(serializer.validated_data)
        report_id = fields.pop('report_id')
        employee_id = fields.pop('employee_id')
        diagnostic = services.create_diagnostic(report_id, employee_id, fields, request.user)
        return Response(self.get_serializer(diagnostic).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        fields = dict(serializer.validated_data)
        fields.pop('report_id', None)
        fields.pop('employee_id', None)
        diagnostic = services.update_diagnostic(instance.pk, fields, request.user)
        return Response(self.get_serializer(diagnostic).data)

    @swagger_auto_schema(method='post', request_body=no_body)
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """Aprova o diagnóstico e gera a ordem de trabalho."""
        work_order, report = services.approve_diagnostic(pk, request.user)
        return Response({
            'work_order': WorkOrderSerializer(work_order).data,
            'report': ReportSerializer(report).data,
        })


class WorkOrderViewSet(mixins.RetrieveModelMixin,
                       mixins.UpdateModelMixin,
                       mixins.ListModelMixin,
                       viewsets.GenericViewSet):
    """
    Ordens de trabalho. São criadas pela aprovação de diagnósticos e nunca
    removidas individualmente; o status muda pelas ações advance/reopen.
    """
    queryset = WorkOrder.objects.select_related(
        'vehicle', 'assigned_to_employee', 'validated_by', 'diagnostic', 'diagnostic__report'
    ).prefetch_related('tasks', 'materials', 'evidence').all()
    serializer_class = WorkOrderSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'priority', 'vehicle', 'assigned_to_employee']
    search_fields = ['code', 'description', 'vehicle__plate', 'vehicle__economic_number']
    ordering_fields = ['code', 'priority', 'created_at']
    ordering = ['-created_at']

    def get_serializer_class(self):
        if self.action == 'list':
            return WorkOrderListSerializer
        return WorkOrderSerializer

    def perform_update(self, serializer):
        services.ensure_work_order_editable(serializer.instance)
        serializer.save()

    def _fresh(self, pk):
        return WorkOrderSerializer(self.get_queryset().get(pk=pk)).data

    @swagger_auto_schema(method='post', request_body=WorkOrderAdvanceSerializer, responses={200: WorkOrderSerializer()})
    @action(detail=True, methods=['post'])
    def advance(self, request, pk=None):
        """Avança a OT para o próximo status do fluxo."""
        serializer = WorkOrderAdvanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        work_order = services.advance_work_order(
            pk,
            serializer.validated_data['target_status'],
            request.user,
            note=serializer.validated_data.get('note', ''),
        )
        return Response(self._fresh(work_order.pk))

    @swagger_auto_schema(method='post', request_body=WorkOrderReopenSerializer, responses={200: WorkOrderSerializer()})
    @action(detail=True, methods=['post'])
    def reopen(self, request, pk=None):
        """Reabre uma OT aguardando validação ou validada (admin)."""
        serializer = WorkOrderReopenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        work_order = services.reopen_work_order(pk, request.user, note=serializer.validated_data.get('note', ''))
        return Response(self._fresh(work_order.pk))

    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        """Histórico de status da OT"""
        work_order = self.get_object()
        entries = WorkOrderHistory.objects.filter(work_order=work_order).select_related('changed_by').order_by('created_at')
        return Response(WorkOrderHistorySerializer(entries, many=True).data)


class WorkOrderChildViewSet(viewsets.ModelViewSet):
    """Base para tarefas, materiais e evidências: OT validada fica congelada."""
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['work_order']
    ordering = ['created_at']

    def perform_create(self, serializer):
        services.ensure_work_order_editable(serializer.validated_data['work_order'])
        serializer.save()

    def perform_update(self, serializer):
        services.ensure_work_order_editable(serializer.instance.work_order)
        target = serializer.validated_data.get('work_order')
        if target is not None:
            services.ensure_work_order_editable(target)
        serializer.save()

    def perform_destroy(self, instance):
        services.ensure_work_order_editable(instance.work_order)
        instance.delete()


class WorkOrderTaskViewSet(WorkOrderChildViewSet):
    queryset = WorkOrderTask.objects.select_related('work_order').all()
    serializer_class = WorkOrderTaskSerializer
    filterset_fields = ['work_order', 'is_done']


class WorkOrderMaterialViewSet(WorkOrderChildViewSet):
    queryset = WorkOrderMaterial.objects.select_related('work_order', 'inventory_item').all()
    serializer_class = WorkOrderMaterialSerializer
    filterset_fields = ['work_order', 'inventory_item']

    @swagger_auto_schema(method='post', request_body=no_body, responses={200: WorkOrderMaterialSerializer()})
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """Aprova o material e dá baixa no estoque vinculado."""
        material = approve_material(self.get_object(), request.user)
        return Response(self.get_serializer(material).data)


class WorkOrderEvidenceViewSet(WorkOrderChildViewSet):
    queryset = WorkOrderEvidence.objects.select_related('work_order', 'uploaded_by').all()
    serializer_class = WorkOrderEvidenceSerializer
    ordering = ['-created_at']

    def perform_create(self, serializer):
        services.ensure_work_order_editable(serializer.validated_data['work_order'])
        serializer.save(uploaded_by=self.request.user)


# ---------------------------------------------------------------------------
# Compras
# ---------------------------------------------------------------------------

class PurchaseQuoteViewSet(viewsets.ModelViewSet):
    """
    Cotações de compra. Só rascunhos podem ser editados; cotação aceita não
    pode ser excluída porque já gerou materiais na OT.
    """
    queryset = PurchaseQuote.objects.select_related('provider', 'work_order').prefetch_related('items__inventory_item')
    serializer_class = PurchaseQuoteSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'provider', 'work_order']
    search_fields = ['quote_number', 'provider__name', 'notes']
    ordering_fields = ['quote_date', 'expiration_date', 'total', 'created_at']
    ordering = ['-quote_date', '-created_at']

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    def perform_update(self, serializer):
        purchasing_services.ensure_quote_editable(serializer.instance)
        serializer.save()

    def perform_destroy(self, instance):
        if instance.status == QuoteStatus.ACCEPTED:
            raise InvalidTransition('Cotação aceita não pode ser excluída.', current_status=instance.status)
        instance.delete()

    @swagger_auto_schema(method='post', request_body=PurchaseQuoteAdvanceSerializer, responses={200: PurchaseQuoteSerializer()})
    @action(detail=True, methods=['post'])
    def advance(self, request, pk=None):
        """Envia, aceita, rejeita ou expira a cotação."""
        serializer = PurchaseQuoteAdvanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        quote = purchasing_services.change_quote_status(pk, serializer.validated_data['target_status'], request.user)
        return Response(self.get_serializer(self.get_queryset().get(pk=quote.pk)).data)

    @swagger_auto_schema(method='post', request_body=no_body)
    @action(detail=False, methods=['post'], url_path='expire-overdue')
    def expire_overdue(self, request):
        count = purchasing_services.expire_overdue_quotes(request.user)
        return Response({'expired': count})


class PurchaseQuoteItemViewSet(viewsets.ModelViewSet):
    """Itens da cotação; cada alteração recalcula os totais da cotação."""
    queryset = PurchaseQuoteItem.objects.select_related('quote', 'inventory_item').all()
    serializer_class = PurchaseQuoteItemSerializer
    permission_classes = [IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['quote', 'inventory_item']
    ordering = ['created_at']

    def perform_create(self, serializer):
        with transaction.atomic():
            quote = purchasing_services.lock_editable_quote(serializer.validated_data['quote'].pk)
            serializer.save()
            quote.recalculate_totals()

    def perform_update(self, serializer):
        with transaction.atomic():
            quote = purchasing_services.lock_editable_quote(serializer.instance.quote_id)
            serializer.save()
            quote.recalculate_totals()

    def perform_destroy(self, instance):
        with transaction.atomic():
            quote = purchasing_services.lock_editable_quote(instance.quote_id)
            instance.delete()
            quote.recalculate_totals()


class NotificationViewSet(mixins.RetrieveModelMixin,
                          mixins.ListModelMixin,
                          mixins.DestroyModelMixin,
                          viewsets.GenericViewSet):
    queryset = Notification.objects.all()
    serializer_class = NotificationSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['kind', 'read']
    ordering = ['-created_at']

    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        notification = self.get_object()
        if not notification.read:
            notification.read = True
            notification.save(update_fields=['read'])
        return Response(self.get_serializer(notification).data)

    @action(detail=False, methods=['post'], url_path='read-all')
    def read_all(self, request):
        updated = mark_all_read()
        return Response({'updated': updated})
