from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class FeatureNotFoundError(DomainError):
    """Feature solicitada nao existe no catalogo."""


class SubscriptionNotFoundError(DomainError):
    """Assinatura solicitada nao existe ou nao esta ativa."""


class InvalidAccessRuleError(DomainError):
    """Regra de acesso do plano esta mal configurada."""


class ForbiddenError(DomainError):
    """Usuario autenticado sem permissao para a operacao."""


class NoActiveSubscriptionError(ForbiddenError):
    """Usuario nao possui assinatura ativa."""


class FeatureAccessDeniedError(ForbiddenError):
    """Plano do usuario nao libera a feature."""


class UsageLimitExceededError(FeatureAccessDeniedError):
    """Limite de uso do periodo foi ultrapassado."""

    def __init__(self, message: str, *, limit: int, used: int):
        super().__init__(message)
        self.limit = limit
        self.used = used
