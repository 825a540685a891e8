"""
Database models package for the Sample Room application.

One model per catalog collection:
- Techpack (PDF)
- Pantone, PrintStrike, PreProduction (images)
"""

# Import database instance
from sampleroom.database import db

# Import all models
from .techpack import Techpack
from .pantone import Pantone
from .print_strike import PrintStrike
from .pre_production import PreProduction

# URL segment -> model
COLLECTIONS = {
    'techpacks': Techpack,
    'pantones': Pantone,
    'print-strikes': PrintStrike,
    'pre-productions': PreProduction,
}

# Export all models
__all__ = [
    'db',
    'COLLECTIONS',
    'Techpack',
    'Pantone',
    'PrintStrike',
    'PreProduction',
]
