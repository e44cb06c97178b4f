from pyramid.config import Configurator

from .models.subscriber import ISubscriber, Subscriber
from .views import callback


def configure_subscriber(config, subscriber):
    """Registers a subscriber and its callback view.

    Every path is routed to the callback view.
    """
    config.registry.registerUtility(subscriber, ISubscriber)

    config.add_route('callback', '/*subpath')
    config.add_view(callback, route_name='callback')


def main(global_config, **settings):
    """ This function returns a Pyramid WSGI application.
    """
    config = Configurator(settings=settings)

    subscriber = Subscriber.from_settings(settings, registry=config.registry)
    configure_subscriber(config, subscriber)

    return config.make_wsgi_app()
