from ghana_law.api.routes.citation import citation_bp
from ghana_law.api.routes.legislation import legislation_bp
from ghana_law.api.routes.international import international_bp
from ghana_law.api.routes.monitoring import monitoring_bp

__all__ = ['citation_bp', 'legislation_bp', 'international_bp', 'monitoring_bp']
