from django.apps import AppConfig


class GroupbuyConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.groupbuy'
    label = 'groupbuy'
    verbose_name = 'Group buy'

    def ready(self):
        from corsheaders.signals import check_request_enabled

        from .signals import allow_cron_cross_origin

        check_request_enabled.connect(
            allow_cron_cross_origin,
            dispatch_uid='groupbuy_allow_cron_cross_origin',
        )
