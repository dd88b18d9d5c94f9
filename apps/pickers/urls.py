from django.urls import path
from . import views

app_name = 'pickers'

urlpatterns = [
    # Calendar helpers
    path('days/', views.month_days, name='days'),
    path('time-slots/', views.day_time_slots, name='time-slots'),
    path('options/', views.panel_options, name='options'),

    # Display
    path('format/', views.display_value, name='format'),

    # Selection state machine
    path('seed/', views.seed, name='seed'),
    path('transition/', views.apply_transition, name='transition'),
    path('range/transition/', views.apply_range_transition, name='range-transition'),
]
