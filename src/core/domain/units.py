"""
Units — Границы числовых полей SafeTx

Все целочисленные поля SafeTx (value, safeTxGas, baseGas, gasPrice, nonce)
хэшируются как uint256, поэтому модели и парсеры ограничивают их этим диапазоном.
"""

from typing import Final


# Максимальное значение uint256
UINT256_MAX: Final[int] = 2**256 - 1
