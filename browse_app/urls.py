from django.urls import path
from . import views


app_name = 'browse_app'

urlpatterns = [
    path("objects/", views.object_list, name="object_list"),
    path("objects/<str:sha>/", views.object_detail, name="object_detail"),
    path(
        "tree/<str:sha>/",
        views.tree_view,
        name="tree_root",
    ),
    path(
        "tree/<str:sha>/<path:path>/",
        views.tree_view,
        name="tree_view",
    ),
    path(
        "blob/<str:sha>/<path:path>/",
        views.blob_view,
        name="blob_view",
    ),
    path(
        "commit/<str:sha>/",
        views.commit_detail,
        name="commit_detail",
    ),
]
