import uuid
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The email field must be set.")
        email = self.normalize_email(email)
        username = extra_fields.get("username")
        if not username:
            extra_fields["username"] = email.split("@")[0]
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.ROLE_ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    ROLE_ADMIN = "admin"
    ROLE_SUPERVISOR = "supervisor"
    ROLE_TECHNICIAN = "technician"
    ROLE_OPERATOR = "operator"

    ROLE_CHOICES = [
        (ROLE_ADMIN, "Administrador"),
        (ROLE_SUPERVISOR, "Supervisor"),
        (ROLE_TECHNICIAN, "Técnico"),
        (ROLE_OPERATOR, "Operador"),
    ]

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_OPERATOR)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    @property
    def is_administrator(self):
        """Validação de OS, reabertura e limpeza de reportes."""
        return self.is_superuser or self.role == self.ROLE_ADMIN

    @property
    def can_supervise(self):
        """Atribuição de reportes e aprovação de diagnósticos/materiais."""
        return self.is_administrator or self.role == self.ROLE_SUPERVISOR
