"""
Exceptions for SmartStock.

All errors are WarehouseError with a structured code for programmatic handling.
"""

from decimal import Decimal
from typing import Any


class WarehouseError(Exception):
    """
    Structured exception for warehouse operations.

    Usage:
        try:
            warehouse.complete_picking(location_id, 15)
        except WarehouseError as e:
            if e.code == 'INSUFFICIENT_QUANTITY':
                print(f"Só tem {e.available} no endereço")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        # Validation (raised before any store call)
        'NAME_REQUIRED': 'Nome é obrigatório',
        'SKU_REQUIRED': 'SKU é obrigatório',
        'CATEGORY_REQUIRED': 'Categoria é obrigatória',
        'CODE_REQUIRED': 'Código da posição é obrigatório',
        'LOCATION_REQUIRED': 'Selecione um local',
        'COUNT_REQUIRED': 'Informe a contagem',
        'INVALID_QUANTITY': 'Quantidade inválida',
        'INVALID_VALUE': 'Valor numérico inválido',
        'INVALID_UNIT': 'Unidade de medida inválida',
        'INVALID_TYPE': 'Tipo de posição inválido',
        'CONFIRMATION_REQUIRED': 'Confirmação necessária para excluir',
        # Domain
        'LOCATION_NOT_FOUND': 'Endereço não encontrado',
        'PRODUCT_NOT_FOUND': 'Produto não encontrado',
        'INSUFFICIENT_QUANTITY': 'Saldo insuficiente no endereço',
        'OPERATION_IN_PROGRESS': 'Operação já em andamento',
        # Store / lifecycle
        'STORE_ERROR': 'Erro no armazenamento',
        'LOAD_FAILED': 'Erro ao sincronizar dados',
        'NOT_LOADED': 'Dados não sincronizados; recarregue antes de continuar',
    }

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"WarehouseError({self.code!r}, {self.message!r})"

    @property
    def available(self) -> Decimal:
        """Shortcut for data['available']."""
        return self.data.get('available', Decimal('0'))

    @property
    def requested(self) -> Decimal:
        """Shortcut for data['requested']."""
        return self.data.get('requested', Decimal('0'))

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }
