# users/tests/test_auth.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


class AuthApiTests(TestCase):
    """
    GUARANTEES:
    - self-registration creates customers or sellers (optionally with a shop), never admins
    - register and login both return a JWT pair plus the profile
    - /me requires authentication
    """

    def setUp(self):
        self.client = APIClient()

    def test_register_defaults_to_customer(self):
        res = self.client.post(
            "/api/auth/register/",
            {"email": "new@example.com", "password": "S3cure-pass!"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(User.objects.get(email="new@example.com").role, User.ROLE_CUSTOMER)

    def test_register_as_seller_opens_first_shop(self):
        res = self.client.post(
            "/api/auth/register/",
            {
                "email": "seller@example.com",
                "password": "S3cure-pass!",
                "role": "seller",
                "shop_name": "Ada Fabrics",
            },
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(res.data["user"]["role"], User.ROLE_SELLER)
        self.assertIn("access", res.data)

        seller = User.objects.get(email="seller@example.com")
        shop = seller.shops.get()
        self.assertEqual(shop.name, "Ada Fabrics")
        self.assertEqual(shop.email, "seller@example.com")
        self.assertEqual(res.data["user"]["shop_ids"], [str(shop.pk)])

    def test_customer_cannot_open_shop_at_registration(self):
        res = self.client.post(
            "/api/auth/register/",
            {"email": "buyer@example.com", "password": "S3cure-pass!", "shop_name": "Nope"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(email="buyer@example.com").exists())

    def test_register_as_admin_rejected(self):
        res = self.client.post(
            "/api/auth/register/",
            {"email": "boss@example.com", "password": "S3cure-pass!", "role": "admin"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(email="boss@example.com").exists())

    def test_login_returns_tokens(self):
        User.objects.create_user(email="buyer@example.com", password="S3cure-pass!")

        res = self.client.post(
            "/api/auth/login/",
            {"email": "buyer@example.com", "password": "S3cure-pass!"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.assertIn("access", res.data)
        self.assertIn("refresh", res.data)
        self.assertEqual(res.data["user"]["email"], "buyer@example.com")

    def test_login_wrong_password(self):
        User.objects.create_user(email="buyer@example.com", password="S3cure-pass!")

        res = self.client.post(
            "/api/auth/login/",
            {"email": "buyer@example.com", "password": "nope"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(res.data["error"]["code"], "INVALID_CREDENTIALS")

    def test_me_requires_authentication(self):
        self.assertEqual(self.client.get("/api/auth/me/").status_code, status.HTTP_401_UNAUTHORIZED)

        user = User.objects.create_user(email="buyer@example.com", password="S3cure-pass!")
        self.client.force_authenticate(user)
        res = self.client.get("/api/auth/me/")
        self.assertEqual(res.data["email"], "buyer@example.com")

    def test_me_patch_updates_contact_details_only(self):
        user = User.objects.create_user(email="buyer@example.com", password="S3cure-pass!")
        self.client.force_authenticate(user)

        res = self.client.patch(
            "/api/auth/me/",
            {"first_name": "Ada", "phone_number": "+2348011111111", "role": "admin"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        user.refresh_from_db()
        self.assertEqual(user.first_name, "Ada")
        self.assertEqual(user.phone_number, "+2348011111111")
        self.assertEqual(user.role, User.ROLE_CUSTOMER)


class UserModelTests(TestCase):
    def test_snapshot_is_denormalized_identity(self):
        user = User.objects.create_user(
            email="buyer@example.com",
            password="pass",
            first_name="Ada",
            last_name="Obi",
            phone_number="+2348000000000",
        )

        snapshot = user.snapshot()
        self.assertEqual(snapshot["email"], "buyer@example.com")
        self.assertEqual(snapshot["name"], "Ada Obi")
        self.assertEqual(snapshot["id"], str(user.pk))

    def test_superuser_is_admin(self):
        admin = User.objects.create_superuser(email="root@example.com", password="pass")
        self.assertEqual(admin.role, User.ROLE_ADMIN)
        self.assertTrue(admin.is_staff)
