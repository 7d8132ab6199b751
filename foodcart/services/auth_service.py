# foodcart/services/auth_service.py
from foodcart.domain.schemas import AuthResponse, SignUpIn, UserProfile
from foodcart.services.http_client import BackendClient
from foodcart.utils.logging import get_logger

logger = get_logger(__name__)


class AuthService:
    """
    Logowanie i trzymanie credentiali w pamieci procesu.
    Token trafia do BackendClient, ktory dokleja go do kazdego requestu.
    """

    def __init__(self, client: BackendClient):
        self.client = client
        self.role: str | None = None
        self.user: UserProfile | None = None

    @property
    def token(self) -> str | None:
        return self.client.token

    @property
    def is_authenticated(self) -> bool:
        return self.client.token is not None

    def sign_in(self, email: str, password: str) -> UserProfile:
        data = self.client.post("/auth/signin", json={"email": email, "password": password})
        self._authenticate(data)
        logger.info(f"Signed in as {self.user.email} ({self.role})")
        return self.user

    def sign_up(self, full_name: str, email: str, password: str, role: str = "ROLE_CUSTOMER") -> UserProfile:
        """Rejestracja - backend od razu zwraca jwt, wiec konto jest zalogowane."""
        payload = SignUpIn(full_name=full_name, email=email, password=password, role=role)
        data = self.client.post("/auth/signup", json=payload.model_dump(by_alias=True))
        self._authenticate(data)
        logger.info(f"Signed up as {self.user.email} ({self.role})")
        return self.user

    def _authenticate(self, data) -> None:
        auth = AuthResponse.model_validate(data)

        self.client.set_token(auth.jwt)
        self.role = auth.role

        # profil pobierany juz z nowym tokenem
        self.user = self.profile()

    def profile(self) -> UserProfile:
        return UserProfile.model_validate(self.client.get("/api/users/profile"))

    def sign_out(self) -> None:
        if self.user is not None:
            logger.info(f"Signing out {self.user.email}")
        self.client.set_token(None)
        self.role = None
        self.user = None
