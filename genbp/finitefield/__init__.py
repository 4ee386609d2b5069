from .modp import IntegersModP
