from rest_framework import serializers


class MonthRevenueSerializer(serializers.Serializer):
    name = serializers.CharField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)


class StatusCountSerializer(serializers.Serializer):
    status = serializers.CharField()
    count = serializers.IntegerField()


class RecentOrderSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    number = serializers.CharField(allow_null=True)
    status = serializers.CharField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    created_at = serializers.DateTimeField()
    user = serializers.SerializerMethodField()

    def get_user(self, obj) -> dict:
        return {"name": obj.user.name, "email": obj.user.email}


class TopProductSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    image_url = serializers.CharField()
    category = serializers.CharField()
    sold = serializers.IntegerField()


class DashboardStatsSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    total_products = serializers.IntegerField()
    total_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    low_stock_products = serializers.IntegerField()
    revenue_by_month = MonthRevenueSerializer(many=True)
    order_status_distribution = StatusCountSerializer(many=True)
    recent_orders = RecentOrderSerializer(many=True)
    top_products = TopProductSerializer(many=True)
