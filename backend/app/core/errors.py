"""Erros de dominio levantados pelos services.

Cada classe carrega o status HTTP que o handler em app.main devolve;
os services nao conhecem FastAPI.
"""


class FinanceError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidPayload(FinanceError):
    """Campo ausente ou invalido."""


class ReferenceNotFound(FinanceError):
    """Referencia informada no payload (conta, categoria, usuario) nao existe."""


class EntityNotFound(FinanceError):
    """Entidade buscada diretamente pelo id nao existe."""

    status_code = 404


class Conflict(FinanceError):
    """Nome/email duplicado ou entidade ainda referenciada."""


class InsufficientFunds(Conflict):
    def __init__(self, account_id: int, message: str = "Saldo insuficiente"):
        super().__init__(message)
        self.account_id = account_id


def account_not_found(account_id: int) -> str:
    return f"Conta {account_id} nao encontrada"


def transaction_not_found(transaction_id: int) -> str:
    return f"Transacao {transaction_id} nao encontrada"


def user_not_found(user_id: int) -> str:
    return f"Usuario {user_id} nao encontrado"


def category_not_found(category_id: int) -> str:
    return f"Categoria {category_id} nao encontrada"
