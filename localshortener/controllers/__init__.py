from localshortener.controllers.redirect_controller import RedirectController, RedirectState
from localshortener.controllers.statistics_controller import StatisticsController, StatisticsSnapshot, summarize


__all__ = [
    'RedirectController',
    'RedirectState',
    'StatisticsController',
    'StatisticsSnapshot',
    'summarize',
]
