"""Review endpoints.

Listing a product's reviews is public; writing and the per-user views
require authentication.
"""

from catalog.models import Product
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import permissions, serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import check_eligibility, list_for_product, list_for_user, pending_products_for_user, rating_summary
from .serializers import (
    EligibilitySerializer,
    MyReviewSerializer,
    PendingProductSerializer,
    ReviewCreateSerializer,
    ReviewSerializer,
)
from .services import ReviewConflict, ReviewError, create_review


class ReviewCreateView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "reviews"

    @extend_schema(
        tags=["Reviews Endpoints"],
        summary="Review a product",
        description="Only products from delivered orders can be reviewed, once per user.",
        request=ReviewCreateSerializer,
        responses={201: ReviewSerializer},
    )
    def post(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            review = create_review(user=request.user, **serializer.validated_data)
        except ReviewConflict as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        except ReviewError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class ProductReviewsView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_scope = "reviews"

    @extend_schema(
        tags=["Reviews Endpoints"],
        summary="List reviews for a product",
        responses={
            200: inline_serializer(
                name="ProductReviews",
                fields={
                    "average": serializers.FloatField(allow_null=True),
                    "count": serializers.IntegerField(),
                    "results": ReviewSerializer(many=True),
                },
            )
        },
    )
    def get(self, request, product_id: int):
        get_object_or_404(Product, pk=product_id)
        reviews = list_for_product(product_id=product_id)
        return Response(
            {**rating_summary(product_id=product_id), "results": ReviewSerializer(reviews, many=True).data}
        )


class ReviewEligibilityView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "reviews"

    @extend_schema(tags=["Reviews Endpoints"], summary="Can I review this product?", responses=EligibilitySerializer)
    def get(self, request, product_id: int):
        return Response(EligibilitySerializer(check_eligibility(user=request.user, product_id=product_id)).data)


class MyReviewsView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "reviews"

    @extend_schema(tags=["Reviews Endpoints"], summary="List my reviews", responses=MyReviewSerializer(many=True))
    def get(self, request):
        return Response(MyReviewSerializer(list_for_user(user=request.user), many=True).data)


class PendingReviewsView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "reviews"

    @extend_schema(
        tags=["Reviews Endpoints"],
        summary="Delivered products I have not reviewed",
        responses=PendingProductSerializer(many=True),
    )
    def get(self, request):
        products = pending_products_for_user(user=request.user)
        return Response(PendingProductSerializer(products, many=True).data)
