from django.apps import AppConfig


class PriceMapConfig(AppConfig):
    name = 'fuel_map.price_map'
    label = 'price_map'
    verbose_name = 'UK fuel price map'
