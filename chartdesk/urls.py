# main urls
from django.contrib import admin
from django.urls import path
from django.http import HttpResponse

from chartdesk.routes import src_api


def healthcheck(request):  # pylint:disable=unused-argument
    """Healthcheck endpoint for load balancers"""
    return HttpResponse("OK")


urlpatterns = [
    path("admin/", admin.site.urls),
    path("healthcheck", healthcheck),
    path("", src_api.urls),
]
