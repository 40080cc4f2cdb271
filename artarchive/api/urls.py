from django.urls import path

from artarchive.api.views import (
    apply_description_view,
    estimate_cost_view,
    generate_description_view,
    translate_view,
)

urlpatterns = [
    path(
        "admin/artworks/<uuid:artwork_id>/generate-description/",
        generate_description_view,
    ),
    path(
        "admin/artworks/<uuid:artwork_id>/apply-description/",
        apply_description_view,
    ),
    path("admin/ai/estimate-cost/", estimate_cost_view),
    path("translate/", translate_view),
]
