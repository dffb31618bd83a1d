"""
Serializers for API request/response validation
"""
from django.conf import settings
from rest_framework import serializers

from .map_builder import marker_color


class CsvUploadSerializer(serializers.Serializer):
    """
    Request serializer for a forecourt CSV upload.
    """
    file = serializers.FileField(
        required=True,
        help_text="Fuel price CSV export",
        error_messages={
            'required': 'A CSV file is required',
            'empty': 'The uploaded file is empty',
        }
    )

    def validate_file(self, value):
        limit = settings.FUEL_CSV_MAX_UPLOAD_BYTES
        if value.size > limit:
            raise serializers.ValidationError(
                f"File is too large ({value.size} bytes, limit {limit})"
            )
        return value


class ForecourtPointSerializer(serializers.Serializer):
    """Individual forecourt with its marker color"""
    id = serializers.CharField()
    lat = serializers.FloatField()
    lng = serializers.FloatField()
    trading_name = serializers.CharField()
    brand = serializers.CharField()
    address = serializers.CharField(allow_blank=True)
    postcode = serializers.CharField(allow_blank=True)
    updated = serializers.CharField(allow_blank=True)
    prices = serializers.DictField(child=serializers.CharField(allow_blank=True))
    has_prices = serializers.BooleanField()
    display_price = serializers.CharField(allow_null=True)
    display_price_value = serializers.FloatField(allow_null=True)
    color = serializers.SerializerMethodField()

    def get_color(self, point):
        return marker_color(point, self.context.get('price_range'))


class StatsSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    brands = serializers.IntegerField()


class PriceRangeSerializer(serializers.Serializer):
    low = serializers.FloatField()
    high = serializers.FloatField()


class ParseResultSerializer(serializers.Serializer):
    """Response format for a parsed upload"""
    file_name = serializers.CharField(allow_blank=True)
    error = serializers.CharField(allow_null=True)
    stats = StatsSerializer(allow_null=True)
    price_range = PriceRangeSerializer(allow_null=True)
    points = serializers.SerializerMethodField()

    def get_points(self, result):
        context = {'price_range': result.price_range}
        return ForecourtPointSerializer(result.points, many=True, context=context).data
