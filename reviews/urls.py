from django.urls import path

from .views import MyReviewsView, PendingReviewsView, ProductReviewsView, ReviewCreateView, ReviewEligibilityView

app_name = "reviews"

urlpatterns = [
    path("", ReviewCreateView.as_view(), name="create"),
    path("product/<int:product_id>/", ProductReviewsView.as_view(), name="product"),
    path("eligibility/<int:product_id>/", ReviewEligibilityView.as_view(), name="eligibility"),
    path("mine/", MyReviewsView.as_view(), name="mine"),
    path("pending/", PendingReviewsView.as_view(), name="pending"),
]
