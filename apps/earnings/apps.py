from django.apps import AppConfig


class EarningsConfig(AppConfig):
    name = "apps.earnings"
    label = "earnings"
    verbose_name = "International Earnings"
