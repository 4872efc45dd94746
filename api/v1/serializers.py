from rest_framework import serializers
from django.contrib.auth import get_user_model

from clients.models import Client, ClientBranch
from diagnostics.models import Diagnostic
from employees.models import Employee, EmployeeType
from inventory.models import InventoryCategory, InventoryItem, InventoryMovement
from maintenance.models import ScheduledMaintenance, ServiceCategory
from notifications.models import Notification
from provider.models import Provider, ProviderType
from purchasing.models import PurchaseQuote, PurchaseQuoteItem
from reports.models import Report
from vehicles.models import Vehicle, VehicleBranchHistory, VehicleStatus, VehicleType
from workorder.models import (
    WorkOrder,
    WorkOrderEvidence,
    WorkOrderMaterial,
    WorkOrderStatus,
    WorkOrderTask,
)
from workorderhistory.models import WorkOrderHistory

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    employee_id = serializers.UUIDField(source='employee_profile.id', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'first_name', 'last_name',
            'role', 'is_active', 'employee_id', 'date_joined', 'last_login'
        ]
        read_only_fields = ['id', 'date_joined', 'last_login']


class UserCreateSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, required=True, style={'input_type': 'password'})
    password_confirm = serializers.CharField(write_only=True, required=True, style={'input_type': 'password'})

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'first_name', 'last_name',
            'role', 'password', 'password_confirm'
        ]
        read_only_fields = ['id']
        extra_kwargs = {'username': {'required': False}}

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({'password': 'As senhas não conferem.'})
        return attrs

    def create(self, validated_data):
        validated_data.pop('password_confirm')
        password = validated_data.pop('password')
        email = validated_data.pop('email')
        return User.objects.create_user(email=email, password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(style={'input_type': 'password'})


class ClientBranchSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(source='client.name', read_only=True)

    class Meta:
        model = ClientBranch
        fields = [
            'id', 'client', 'client_name', 'name', 'address',
            'phone', 'contact_name', 'is_active', 'created_at'
        ]
        read_only_fields = ['id', 'created_at']


class ClientSerializer(serializers.ModelSerializer):
    branches = ClientBranchSerializer(many=True, read_only=True)

    class Meta:
        model = Client
        fields = [
            'id', 'name', 'company', 'phone', 'email', 'address',
            'status', 'branches', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class VehicleTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = VehicleType
        fields = ['id', 'name', 'description', 'created_at']
        read_only_fields = ['id', 'created_at']


class VehicleSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(source='client.name', read_only=True)
    vehicle_type_name = serializers.CharField(source='vehicle_type.name', read_only=True)

    class Meta:
        model = Vehicle
        fields = [
            'id', 'client', 'client_name', 'branch',
            'vehicle_type', 'vehicle_type_name',
            'brand', 'model', 'year', 'plate', 'vin', 'color',
            'mileage', 'fuel_type', 'status',
            'assigned_area', 'economic_number',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_status(self, value):
        # "Em serviço" é derivado das ordens de trabalho abertas
        current = self.instance.status if self.instance else VehicleStatus.ACTIVE
        if value == current:
            return value
        if value == VehicleStatus.IN_SERVICE:
            raise serializers.ValidationError('O status "em serviço" é definido pelas ordens de trabalho.')
        if self.instance and self.instance.work_orders.exclude(status=WorkOrderStatus.VALIDATED).exists():
            raise serializers.ValidationError('Veículo possui ordens de trabalho abertas.')
        return value

    def validate_branch(self, value):
        # Troca de sucursal passa pela ação transfer, que registra o histórico
        if self.instance is not None and self.instance.branch_id and value != self.instance.branch:
            raise serializers.ValidationError('Use a transferência para trocar a sucursal do veículo.')
        return value

    def validate(self, attrs):
        branch = attrs.get('branch')
        client = attrs.get('client', self.instance.client if self.instance else None)
        if branch and branch.client_id != getattr(client, 'pk', None):
            raise serializers.ValidationError({'branch': 'A sucursal não pertence ao cliente informado.'})
        return attrs


class VehicleTransferSerializer(serializers.Serializer):
    to_branch_id = serializers.UUIDField()
    reason = serializers.CharField()


class VehicleBranchHistorySerializer(serializers.ModelSerializer):
    from_branch_name = serializers.CharField(source='from_branch.name', read_only=True, default=None)
    to_branch_name = serializers.CharField(source='to_branch.name', read_only=True, default=None)
    transferred_by_email = serializers.EmailField(source='transferred_by.email', read_only=True, default=None)

    class Meta:
        model = VehicleBranchHistory
        fields = [
            'id', 'vehicle', 'from_branch', 'from_branch_name',
            'to_branch', 'to_branch_name', 'reason',
            'transferred_by', 'transferred_by_email', 'created_at'
        ]
        read_only_fields = fields


class EmployeeTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = EmployeeType
        fields = ['id', 'name', 'description', 'created_at']
        read_only_fields = ['id', 'created_at']


class EmployeeSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)
    employee_type_name = serializers.CharField(source='employee_type.name', read_only=True)
    user_email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = Employee
        fields = [
            'id', 'first_name', 'last_name', 'full_name',
            'employee_type', 'employee_type_name',
            'phone', 'email', 'user', 'user_email',
            'is_active', 'created_at'
        ]
        read_only_fields = ['id', 'created_at']


class ProviderTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProviderType
        fields = ['id', 'name', 'description', 'created_at']
        read_only_fields = ['id', 'created_at']


class ProviderSerializer(serializers.ModelSerializer):
    provider_type_name = serializers.CharField(source='provider_type.name', read_only=True)

    class Meta:
        model = Provider
        fields = [
            'id', 'name', 'provider_type', 'provider_type_name',
            'phone', 'email', 'address', 'rating', 'status',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class InventoryCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = InventoryCategory
        fields = ['id', 'name', 'description', 'created_at']
        read_only_fields = ['id', 'created_at']


class InventoryItemSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.name', read_only=True)
    provider_name = serializers.CharField(source='provider.name', read_only=True)
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            'id', 'name', 'category', 'category_name', 'part_number',
            'quantity', 'min_quantity', 'max_quantity', 'is_low_stock',
            'unit_price', 'location', 'provider', 'provider_name',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_quantity(self, value):
        # Saldo inicial pode ser informado; depois disso só por movimentação
        if self.instance is not None and value != self.instance.quantity:
            raise serializers.ValidationError('Use uma movimentação de estoque para alterar o saldo.')
        return value

    def validate(self, attrs):
        min_quantity = attrs.get('min_quantity', getattr(self.instance, 'min_quantity', 0))
        max_quantity = attrs.get('max_quantity', getattr(self.instance, 'max_quantity', 0))
        if max_quantity and min_quantity > max_quantity:
            raise serializers.ValidationError({'min_quantity': 'A quantidade mínima não pode superar a máxima.'})
        return attrs


class InventoryMovementSerializer(serializers.ModelSerializer):
    item_name = serializers.CharField(source='item.name', read_only=True)
    created_by_email = serializers.EmailField(source='created_by.email', read_only=True)

    class Meta:
        model = InventoryMovement
        fields = [
            'id', 'item', 'item_name', 'movement_type', 'quantity',
            'balance_after', 'reference', 'notes',
            'created_by', 'created_by_email', 'created_at'
        ]
        read_only_fields = ['id', 'balance_after', 'created_by', 'created_at']


class ServiceCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ServiceCategory
        fields = ['id', 'name', 'description', 'active', 'created_at']
        read_only_fields = ['id', 'created_at']


class ScheduledMaintenanceSerializer(serializers.ModelSerializer):
    vehicle_plate = serializers.CharField(source='vehicle.plate', read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True)
    is_overdue = serializers.SerializerMethodField()

    class Meta:
        model = ScheduledMaintenance
        fields = [
            'id', 'vehicle', 'vehicle_plate', 'category', 'category_name',
            'title', 'description', 'frequency',
            'next_due_date', 'next_due_mileage', 'estimated_cost',
            'status', 'is_overdue', 'last_completed_at',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'last_completed_at', 'created_at', 'updated_at']

    def get_is_overdue(self, obj):
        return obj.is_overdue()


class MaintenanceCompleteSerializer(serializers.Serializer):
    mileage = serializers.IntegerField(required=False, min_value=0)


class ReportSerializer(serializers.ModelSerializer):
    vehicle_plate = serializers.CharField(source='vehicle.plate', read_only=True)
    reported_by_email = serializers.EmailField(source='reported_by.email', read_only=True)
    assigned_to_employee_name = serializers.CharField(source='assigned_to_employee.full_name', read_only=True)

    class Meta:
        model = Report
        fields = [
            'id', 'vehicle', 'vehicle_plate',
            'reported_by', 'reported_by_email',
            'description', 'images', 'audio_url', 'notes',
            'status', 'assigned_to_employee', 'assigned_to_employee_name',
            'assigned_at', 'resolved_at',
            'created_at', 'updated_at'
        ]
        # Status e atribuição mudam apenas pelas ações do ciclo
        read_only_fields = [
            'id', 'reported_by', 'status', 'assigned_to_employee',
            'assigned_at', 'resolved_at', 'created_at', 'updated_at'
        ]

    def validate_images(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError('Informe uma lista de imagens.')
        for image in value:
            if not isinstance(image, dict) or not image.get('url'):
                raise serializers.ValidationError('Cada imagem precisa de "url".')
        return [{'url': image['url'], 'description': image.get('description', '')} for image in value]

    def validate_vehicle(self, value):
        if self.instance is not None and value != self.instance.vehicle:
            raise serializers.ValidationError('O veículo do reporte não pode ser alterado.')
        return value


class ReportAssignSerializer(serializers.Serializer):
    employee_id = serializers.UUIDField()


class DiagnosticSerializer(serializers.ModelSerializer):
    report_id = serializers.UUIDField(write_only=True)
    employee_id = serializers.UUIDField(write_only=True)
    employee_name = serializers.CharField(source='employee.full_name', read_only=True)
    approved_by_email = serializers.EmailField(source='approved_by.email', read_only=True)
    work_order = serializers.SerializerMethodField()

    class Meta:
        model = Diagnostic
        fields = [
            'id', 'report', 'report_id', 'employee', 'employee_id', 'employee_name',
            'diagnosis', 'recommendations', 'estimated_cost',
            'odometer', 'vehicle_condition', 'fuel_level', 'severity',
            'estimated_repair_time', 'required_materials', 'requires_additional_tests',
            'approved_by', 'approved_by_email', 'approved_at', 'work_order',
            'created_at', 'updated_at'
        ]
        read_only_fields = [
            'id', 'report', 'employee', 'approved_by', 'approved_at',
            'created_at', 'updated_at'
        ]

    def get_work_order(self, obj):
        work_order = getattr(obj, 'work_order', None)
        return str(work_order.pk) if work_order else None

    def get_fields(self):
        fields = super().get_fields()
        if self.instance is not None:
            # Reporte e funcionário são fixados na criação
            fields['report_id'].required = False
            fields['employee_id'].required = False
        return fields


class WorkOrderHistorySerializer(serializers.ModelSerializer):
    work_order_code = serializers.CharField(source='work_order.code', read_only=True)
    previous_status_name = serializers.CharField(source='get_previous_status_display', read_only=True)
    new_status_name = serializers.CharField(source='get_new_status_display', read_only=True)
    changed_by_email = serializers.EmailField(source='changed_by.email', read_only=True)

    class Meta:
        model = WorkOrderHistory
        fields = [
            'id', 'work_order', 'work_order_code',
            'previous_status', 'previous_status_name',
            'new_status', 'new_status_name',
            'changed_by', 'changed_by_email',
            'note', 'created_at'
        ]
        read_only_fields = fields


class WorkOrderTaskSerializer(serializers.ModelSerializer):
    class Meta:
        model = WorkOrderTask
        fields = ['id', 'work_order', 'title', 'description', 'is_done', 'done_at', 'created_at']
        read_only_fields = ['id', 'done_at', 'created_at']


class WorkOrderMaterialSerializer(serializers.ModelSerializer):
    inventory_item_name = serializers.CharField(source='inventory_item.name', read_only=True)
    total_cost = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = WorkOrderMaterial
        fields = [
            'id', 'work_order', 'description',
            'inventory_item', 'inventory_item_name',
            'quantity', 'unit_cost', 'total_cost',
            'approved_by', 'approved_at', 'created_at'
        ]
        read_only_fields = ['id', 'approved_by', 'approved_at', 'created_at']

    def validate(self, attrs):
        if self.instance is not None and self.instance.approved_at is not None:
            raise serializers.ValidationError('Material aprovado não pode ser alterado.')
        return attrs


class WorkOrderEvidenceSerializer(serializers.ModelSerializer):
    class Meta:
        model = WorkOrderEvidence
        fields = ['id', 'work_order', 'file_url', 'description', 'uploaded_by', 'created_at']
        read_only_fields = ['id', 'uploaded_by', 'created_at']


class WorkOrderSerializer(serializers.ModelSerializer):
    vehicle_plate = serializers.CharField(source='vehicle.plate', read_only=True)
    vehicle_status = serializers.CharField(source='vehicle.status', read_only=True)
    report = serializers.UUIDField(source='diagnostic.report_id', read_only=True)
    report_status = serializers.CharField(source='diagnostic.report.status', read_only=True)
    assigned_to_employee_name = serializers.CharField(source='assigned_to_employee.full_name', read_only=True)
    validated_by_email = serializers.EmailField(source='validated_by.email', read_only=True)
    tasks = WorkOrderTaskSerializer(many=True, read_only=True)
    materials = WorkOrderMaterialSerializer(many=True, read_only=True)
    evidence = WorkOrderEvidenceSerializer(many=True, read_only=True)

    class Meta:
        model = WorkOrder
        fields = [
            'id', 'code', 'diagnostic', 'report', 'report_status',
            'vehicle', 'vehicle_plate', 'vehicle_status',
            'assigned_to_employee', 'assigned_to_employee_name',
            'status', 'priority', 'description', 'notes',
            'estimated_cost', 'actual_cost',
            'start_date', 'completed_date',
            'validated_at', 'validated_by', 'validated_by_email',
            'tasks', 'materials', 'evidence',
            'created_at', 'updated_at'
        ]
        # Status e datas do fluxo mudam só pelas ações advance/reopen
        read_only_fields = [
            'id', 'code', 'diagnostic', 'vehicle', 'status',
            'start_date', 'completed_date', 'validated_at', 'validated_by',
            'created_at', 'updated_at'
        ]


class WorkOrderListSerializer(serializers.ModelSerializer):
    """Serializer enxuto para listagens"""
    vehicle_plate = serializers.CharField(source='vehicle.plate', read_only=True)
    assigned_to_employee_name = serializers.CharField(source='assigned_to_employee.full_name', read_only=True)

    class Meta:
        model = WorkOrder
        fields = [
            'id', 'code', 'vehicle', 'vehicle_plate',
            'assigned_to_employee_name', 'status', 'priority',
            'estimated_cost', 'actual_cost', 'created_at'
        ]


class WorkOrderAdvanceSerializer(serializers.Serializer):
    target_status = serializers.CharField()
    note = serializers.CharField(required=False, allow_blank=True, default='')


class WorkOrderReopenSerializer(serializers.Serializer):
    note = serializers.CharField(required=False, allow_blank=True, default='')


class PurchaseQuoteItemSerializer(serializers.ModelSerializer):
    inventory_item_name = serializers.CharField(source='inventory_item.name', read_only=True, default=None)

    class Meta:
        model = PurchaseQuoteItem
        fields = [
            'id', 'quote', 'inventory_item', 'inventory_item_name',
            'description', 'quantity', 'unit_price', 'total',
            'notes', 'created_at'
        ]
        read_only_fields = ['id', 'total', 'created_at']

    def validate_quote(self, value):
        if self.instance is not None and value != self.instance.quote:
            raise serializers.ValidationError('O item não pode mudar de cotação.')
        return value


class PurchaseQuoteSerializer(serializers.ModelSerializer):
    provider_name = serializers.CharField(source='provider.name', read_only=True)
    work_order_code = serializers.CharField(source='work_order.code', read_only=True, default=None)
    items = PurchaseQuoteItemSerializer(many=True, read_only=True)

    class Meta:
        model = PurchaseQuote
        fields = [
            'id', 'quote_number', 'provider', 'provider_name',
            'work_order', 'work_order_code',
            'quote_date', 'expiration_date', 'status',
            'subtotal', 'tax', 'total', 'notes', 'items',
            'created_by', 'decided_by', 'decided_at',
            'created_at', 'updated_at'
        ]
        # Status muda pela ação advance; totais vêm dos itens
        read_only_fields = [
            'id', 'status', 'subtotal', 'tax', 'total',
            'created_by', 'decided_by', 'decided_at', 'created_at', 'updated_at'
        ]
        extra_kwargs = {'quote_number': {'required': False}}

    def validate_provider(self, value):
        changed = self.instance is None or value != self.instance.provider
        if changed and value.status != Provider.STATUS_ACTIVE:
            raise serializers.ValidationError('Fornecedor inativo.')
        return value

    def validate_work_order(self, value):
        if value is not None and value.status == WorkOrderStatus.VALIDATED:
            raise serializers.ValidationError('A OT já foi validada.')
        return value

    def validate(self, attrs):
        quote_date = attrs.get('quote_date', getattr(self.instance, 'quote_date', None))
        expiration_date = attrs.get('expiration_date', getattr(self.instance, 'expiration_date', None))
        if quote_date and expiration_date and expiration_date < quote_date:
            raise serializers.ValidationError({'expiration_date': 'A validade não pode ser anterior à data da cotação.'})
        return attrs


class PurchaseQuoteAdvanceSerializer(serializers.Serializer):
    target_status = serializers.CharField()


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ['id', 'kind', 'title', 'message', 'read', 'created_at']
        read_only_fields = ['id', 'kind', 'title', 'message', 'created_at']
