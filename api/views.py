# api/views.py
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from accounts import services as account_services
from accounts.decorators import role_required
from accounts.models import CustomUser
from accounts.roles import profile_summary
from algorithms.exceptions import MissingProfile
from algorithms.stock import classify
from donors import services as donor_services
from organizations import services as organization_services
from receivers import services as receiver_services

from .serializers import (
    BloodRequestCreateSerializer,
    BloodRequestSerializer,
    CooldownSerializer,
    DonationRecordSerializer,
    DonorSerializer,
    InventoryItemSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    ReviewSerializer,
    StockUpdateSerializer,
    VerificationRequestSerializer,
)


# ============================================
# REGISTRATION & PROFILE
# ============================================
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a donor, receiver or organization"""
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    common = {
        'name': data['name'],
        'email': data['email'],
        'password': data['password'],
        'city': data['city'],
        'contact_number': data['contact_number'],
    }
    user_type = data['user_type']
    if user_type == CustomUser.DONOR:
        profile = account_services.register_donor(
            blood_group=data['blood_group'],
            last_donation_date=data.get('last_donation_date'),
            **common
        )
    elif user_type == CustomUser.RECEIVER:
        profile = account_services.register_receiver(receiver_type=data['receiver_type'], **common)
    elif user_type == CustomUser.ORGANIZATION:
        profile = account_services.register_organization(
            organization_type=data['organization_type'],
            license_id=data['license_id'],
            **common
        )
    else:
        raise ValidationError({'user_type': f"Unknown user type {user_type}"})

    return Response({
        'id': profile.user.id,
        'user_type': user_type,
        'profile_id': profile.id,
    }, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH'])
def me(request):
    """Current user; PATCH updates name, contact number and city"""
    user = request.user
    if request.method == 'PATCH':
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = account_services.update_profile(user, **serializer.validated_data)

    try:
        profile = profile_summary(user)
    except MissingProfile:
        profile = None

    return Response({
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'user_type': user.user_type,
        'city': user.city,
        'contact_number': user.contact_number,
        'profile': profile,
    })


# ============================================
# DONOR
# ============================================
@api_view(['GET'])
@role_required(CustomUser.DONOR)
def donor_candidates(request, profile):
    """Requests this donor can fulfil; dashboards poll this endpoint"""
    candidates = donor_services.candidate_requests(profile.id)
    return Response(BloodRequestSerializer(candidates, many=True).data)


@api_view(['POST'])
@role_required(CustomUser.DONOR)
def accept_request(request, request_id, profile):
    result = donor_services.accept_request(profile.id, request_id)
    return Response({
        'request': BloodRequestSerializer(result.request).data,
        'donation': DonationRecordSerializer(result.donation).data,
        'donor': DonorSerializer(result.donor).data,
    })


@api_view(['GET'])
@role_required(CustomUser.DONOR)
def donor_cooldown(request, profile):
    dashboard = donor_services.donor_dashboard(profile.id)
    return Response(CooldownSerializer(dashboard['cooldown']).data)


@api_view(['GET'])
@role_required(CustomUser.DONOR)
def donor_donations(request, profile):
    dashboard = donor_services.donor_dashboard(profile.id)
    return Response({
        'donations': DonationRecordSerializer(dashboard['donations'], many=True).data,
        'total_donations': dashboard['total_donations'],
        'lives_saved': dashboard['lives_saved'],
    })


# ============================================
# RECEIVER
# ============================================
@api_view(['GET', 'POST'])
@role_required(CustomUser.RECEIVER)
def blood_requests(request, profile):
    if request.method == 'POST':
        serializer = BloodRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        blood_request = receiver_services.create_blood_request(profile.id, **serializer.validated_data)
        return Response(BloodRequestSerializer(blood_request).data, status=status.HTTP_201_CREATED)

    requests = receiver_services.receiver_requests(profile.id)
    return Response(BloodRequestSerializer(requests, many=True).data)


@api_view(['POST'])
@role_required(CustomUser.RECEIVER)
def cancel_blood_request(request, request_id, profile):
    blood_request = receiver_services.cancel_blood_request(profile.id, request_id)
    return Response(BloodRequestSerializer(blood_request).data)


@api_view(['POST'])
@role_required(CustomUser.RECEIVER)
def fulfil_blood_request(request, request_id, profile):
    blood_request = receiver_services.fulfil_blood_request(profile.id, request_id)
    return Response(BloodRequestSerializer(blood_request).data)


# ============================================
# ORGANIZATION
# ============================================
@api_view(['GET'])
@role_required(CustomUser.ORGANIZATION)
def verifications(request, profile):
    status_filter = request.query_params.get('status')
    if status_filter == 'all':
        status_filter = None
    items = receiver_services.verifications_for_organization(profile.id, status=status_filter)
    return Response(VerificationRequestSerializer(items, many=True).data)


@api_view(['POST'])
@role_required(CustomUser.ORGANIZATION)
def approve_verification(request, verification_id, profile):
    serializer = ReviewSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    result = receiver_services.approve_verification(
        profile.id, verification_id, notes=serializer.validated_data['notes']
    )
    return Response({
        'verification': VerificationRequestSerializer(result.verification).data,
        'hospital_verified': result.hospital is not None,
    })


@api_view(['POST'])
@role_required(CustomUser.ORGANIZATION)
def reject_verification(request, verification_id, profile):
    serializer = ReviewSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    verification = receiver_services.reject_verification(
        profile.id, verification_id, notes=serializer.validated_data['notes']
    )
    return Response({'verification': VerificationRequestSerializer(verification).data})


@api_view(['GET', 'POST'])
@role_required(CustomUser.ORGANIZATION)
def inventory(request, profile):
    if request.method == 'POST':
        serializer = StockUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = organization_services.update_stock(profile.id, **serializer.validated_data)
        return Response(InventoryItemSerializer(item).data)

    items = organization_services.organization_inventory(profile.id)
    return Response(InventoryItemSerializer(items, many=True).data)


@api_view(['GET'])
@role_required(CustomUser.ORGANIZATION)
def inventory_alerts(request, profile):
    items = organization_services.restock_alerts(profile.id)
    return Response(InventoryItemSerializer(items, many=True).data)


@api_view(['GET'])
@role_required(CustomUser.ORGANIZATION)
def organization_dashboard(request, profile):
    dashboard = organization_services.organization_dashboard(profile.id)
    return Response({
        'city': profile.city,
        'requests': dashboard['requests'],
        'donors': dashboard['donors'],
        'inventory': dashboard['inventory'],
    })


# ============================================
# STOCK LEVEL
# ============================================
@api_view(['GET'])
def stock_level(request):
    """Classify a unit count, e.g. /api/stock-level/?units=4"""
    try:
        units = int(request.query_params.get('units', ''))
    except ValueError:
        raise ValidationError({'units': 'A whole number is required.'})
    if units < 0:
        raise ValidationError({'units': 'Must not be negative.'})
    return Response({'units': units, 'stock_level': classify(units)})
