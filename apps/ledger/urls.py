from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'ledger'

router = DefaultRouter()
router.register(r'', views.LedgerEntryViewSet, basename='entry')

urlpatterns = [
    # Room-scoped routes (mounted under /api/rooms/)
    # GET    /api/rooms/{room_id}/ledger/                      - List entries
    # POST   /api/rooms/{room_id}/ledger/                      - Create entry
    # GET    /api/rooms/{room_id}/ledger/balances/             - All member balances
    # GET    /api/rooms/{room_id}/ledger/balances/{member_id}/ - One member's balance
    path('rooms/<uuid:room_id>/ledger/', views.room_ledger, name='room-ledger'),
    path('rooms/<uuid:room_id>/ledger/balances/', views.room_balances, name='room-balances'),
    path(
        'rooms/<uuid:room_id>/ledger/balances/<uuid:member_id>/',
        views.room_member_balance,
        name='room-member-balance'
    ),

    # Split payments
    # POST   /api/ledger/splits/{split_id}/pay/ - Record a payment
    path('ledger/splits/<uuid:split_id>/pay/', views.pay_split, name='split-pay'),

    # Entry ViewSet routes
    # GET    /api/ledger/{id}/               - Get entry with splits
    # DELETE /api/ledger/{id}/               - Delete entry
    # PUT    /api/ledger/{id}/splits/        - Assign manual splits
    # POST   /api/ledger/{id}/splits/equal/  - Calculate equal splits
    # POST   /api/ledger/{id}/cancel/        - Cancel entry
    path('ledger/', include(router.urls)),
]
