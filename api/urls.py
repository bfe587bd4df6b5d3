# api/urls.py - COMPLETE URL CONFIGURATION

from django.urls import path
from . import views

app_name = 'api'

urlpatterns = [
    # Registration & profile
    path('register/', views.register, name='register'),
    path('me/', views.me, name='me'),

    # Donor
    path('donor/candidates/', views.donor_candidates, name='donor-candidates'),
    path('donor/requests/<int:request_id>/accept/', views.accept_request, name='accept-request'),
    path('donor/cooldown/', views.donor_cooldown, name='donor-cooldown'),
    path('donor/donations/', views.donor_donations, name='donor-donations'),

    # Receiver
    path('blood-requests/', views.blood_requests, name='blood-requests'),
    path('blood-requests/<int:request_id>/cancel/', views.cancel_blood_request, name='cancel-blood-request'),
    path('blood-requests/<int:request_id>/fulfill/', views.fulfil_blood_request, name='fulfil-blood-request'),

    # Organization
    path('verifications/', views.verifications, name='verifications'),
    path('verifications/<int:verification_id>/approve/', views.approve_verification, name='approve-verification'),
    path('verifications/<int:verification_id>/reject/', views.reject_verification, name='reject-verification'),
    path('inventory/', views.inventory, name='inventory'),
    path('inventory/alerts/', views.inventory_alerts, name='inventory-alerts'),
    path('organization/dashboard/', views.organization_dashboard, name='organization-dashboard'),

    # Shared
    path('stock-level/', views.stock_level, name='stock-level'),
]

# Available endpoints:
# POST /api/register/                                  - Register donor / receiver / organization
# GET  /api/me/                                        - Current user and role profile
# PATCH /api/me/                                       - Update name, contact number, city
#
# GET  /api/donor/candidates/                          - Requests the donor can fulfil (poll)
# POST /api/donor/requests/{id}/accept/                - Accept a request, start cooldown
# GET  /api/donor/cooldown/                            - Cooldown status
# GET  /api/donor/donations/                           - Donation history
#
# GET  /api/blood-requests/                            - Receiver's requests
# POST /api/blood-requests/                            - Create a request
# POST /api/blood-requests/{id}/cancel/                - Cancel a pending request
# POST /api/blood-requests/{id}/fulfill/               - Confirm a matched request
#
# GET  /api/verifications/                             - Hospital verifications in the organization's city
# POST /api/verifications/{id}/approve/                - Approve a hospital
# POST /api/verifications/{id}/reject/                 - Reject a hospital
# GET  /api/inventory/                                 - Organization inventory
# POST /api/inventory/                                 - Set stock for one blood group
# GET  /api/inventory/alerts/                          - Low and critical stock
# GET  /api/organization/dashboard/                    - City snapshot
#
# GET  /api/stock-level/?units=N                       - Classify a unit count
