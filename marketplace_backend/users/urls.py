# users/urls.py

"""
/api/auth/

register, login and jwt/* are public; me/ needs a bearer token.
login/ returns the user alongside a token pair, jwt/create/ only the pair.
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .views import LoginView, MeView, RegisterView

app_name = "users"

public_patterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
]

urlpatterns = public_patterns + [
    path("me/", MeView.as_view(), name="me"),
]
