from django.urls import include, path

urlpatterns = [
    path('', include('prefix_finder.urls')),
]
