"""
Analyze API routes
==================

Performance and design-pattern analysis.
"""

from flask import Blueprint

from ...services.generation_service import get_generation_service
from .common import api_success, get_json_body

analyze_bp = Blueprint('analyze', __name__, url_prefix='/analyze')


@analyze_bp.route('/performance', methods=['POST'])
def analyze_performance():
    """POST /api/analyze/performance  {projectPath, metrics}"""
    data = get_json_body()
    metrics = data.get('metrics')
    if not isinstance(metrics, list):
        metrics = []

    analysis = get_generation_service().analyze_performance(data.get('projectPath'), metrics)
    return api_success(analysis=analysis)


@analyze_bp.route('/design-patterns', methods=['POST'])
def analyze_design_patterns():
    """POST /api/analyze/design-patterns  {codebase}"""
    data = get_json_body()
    patterns = get_generation_service().analyze_patterns(data.get('codebase'))
    return api_success(patterns=patterns)
