from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import RefreshToken

from internships.tests.factories import make_faculty


class RequestLogTests(APITestCase):
    url = "/auth/users/me/"

    def test_bearer_token_user_is_logged_with_role(self):
        faculty = make_faculty()
        token = RefreshToken.for_user(faculty.user).access_token
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        with self.assertLogs("internportal.middleware", "INFO") as logs:
            self.client.get(self.url)

        (line,) = logs.output
        self.assertIn("[FACULTY", line)
        self.assertIn("/auth/users/me/ -> 200", line)
        self.assertNotIn("ANONYMOUS", line)

    def test_missing_token_is_logged_as_anonymous(self):
        with self.assertLogs("internportal.middleware", "INFO") as logs:
            self.client.get(self.url)

        self.assertIn("[ANONYMOUS", logs.output[0])
