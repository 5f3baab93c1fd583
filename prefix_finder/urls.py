from django.urls import path
from . import views

urlpatterns = [
    # Postfix expression to NFA
    path('api/build-automaton/', views.build_automaton, name='build_automaton'),
    path('api/validate-postfix/', views.validate_postfix, name='validate_postfix'),

    # Bounded prefix search over a single repeated letter
    path('api/find-prefix/', views.find_prefix, name='find_prefix'),
]
