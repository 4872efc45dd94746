from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    LoginView,
    LogoutView,
    UserViewSet,
    ClientViewSet,
    ClientBranchViewSet,
    VehicleTypeViewSet,
    VehicleViewSet,
    EmployeeTypeViewSet,
    EmployeeViewSet,
    ProviderTypeViewSet,
    ProviderViewSet,
    InventoryCategoryViewSet,
    InventoryItemViewSet,
    InventoryMovementViewSet,
    ServiceCategoryViewSet,
    ScheduledMaintenanceViewSet,
    ReportViewSet,
    DiagnosticViewSet,
    WorkOrderViewSet,
    WorkOrderTaskViewSet,
    WorkOrderMaterialViewSet,
    WorkOrderEvidenceViewSet,
    PurchaseQuoteViewSet,
    PurchaseQuoteItemViewSet,
    NotificationViewSet
)

router = DefaultRouter()

# Cadastros
router.register(r'users', UserViewSet, basename='user')
router.register(r'clients', ClientViewSet, basename='client')
router.register(r'client-branches', ClientBranchViewSet, basename='clientbranch')
router.register(r'vehicle-types', VehicleTypeViewSet, basename='vehicletype')
router.register(r'vehicles', VehicleViewSet, basename='vehicle')
router.register(r'employee-types', EmployeeTypeViewSet, basename='employeetype')
router.register(r'employees', EmployeeViewSet, basename='employee')
router.register(r'provider-types', ProviderTypeViewSet, basename='providertype')
router.register(r'providers', ProviderViewSet, basename='provider')

# Estoque e manutenção programada
router.register(r'inventory-categories', InventoryCategoryViewSet, basename='inventorycategory')
router.register(r'inventory-items', InventoryItemViewSet, basename='inventoryitem')
router.register(r'inventory-movements', InventoryMovementViewSet, basename='inventorymovement')
router.register(r'service-categories', ServiceCategoryViewSet, basename='servicecategory')
router.register(r'scheduled-maintenance', ScheduledMaintenanceViewSet, basename='scheduledmaintenance')

# Ciclo de manutenção
router.register(r'reports', ReportViewSet, basename='report')
router.register(r'diagnostics', DiagnosticViewSet, basename='diagnostic')
router.register(r'work-orders', WorkOrderViewSet, basename='workorder')
router.register(r'work-order-tasks', WorkOrderTaskViewSet, basename='workordertask')
router.register(r'work-order-materials', WorkOrderMaterialViewSet, basename='workordermaterial')
router.register(r'work-order-evidence', WorkOrderEvidenceViewSet, basename='workorderevidence')
# Compras
router.register(r'purchase-quotes', PurchaseQuoteViewSet, basename='purchasequote')
router.register(r'purchase-quote-items', PurchaseQuoteItemViewSet, basename='purchasequoteitem')

router.register(r'notifications', NotificationViewSet, basename='notification')

urlpatterns = [
    path('auth/login/', LoginView.as_view(), name='api-login'),
    path('auth/logout/', LogoutView.as_view(), name='api-logout'),
    path('', include(router.urls)),
]
