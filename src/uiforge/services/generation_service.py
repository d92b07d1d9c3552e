"""
Generation Service
==================

Orchestrates every AI-backed feature: build the prompt, call the completion
client, decode the reply and fall back to a static result when anything on
the external side goes wrong. None of the public methods raise for
completion or decode failures; callers always receive a result of the
documented shape.

Usage:
    service = GenerationService(client)
    analysis = service.analyze_image(image_bytes, 'image/png')
"""

import base64
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..constants import DEFAULT_STYLE, DEFAULT_TEMPLATE, MAX_COMPONENT_FILES, FileType, GenerationTask
from ..utils.json_extract import extract_json, has_keys
from . import fallbacks, prompts
from .completion_client import CompletionClient, CompletionError, CompletionHTTPError

logger = logging.getLogger(__name__)

# Top-level keys a decoded reply must carry to be accepted
REQUIRED_KEYS = {
    GenerationTask.ANALYZE_IMAGE: ('components', 'colorPalette', 'layout', 'estimatedComplexity'),
    GenerationTask.GENERATE_PAGE: ('components', 'styles', 'routes'),
    GenerationTask.ANALYZE_PERFORMANCE: ('performance', 'suggestions', 'codeSmells', 'securityIssues'),
    GenerationTask.ANALYZE_PATTERNS: ('detected', 'antiPatterns'),
}

# (max_tokens, temperature) per call kind
ANALYSIS_SETTINGS = (2048, 0.3)
CODE_SETTINGS = (4096, 0.2)
COMPONENT_SETTINGS = (2048, 0.2)


class GenerationService:
    """Prompt orchestration over a ``CompletionClient``."""

    def __init__(self, client: CompletionClient, model_name: Optional[str] = None):
        self.client = client
        self.model_name = model_name or getattr(client, 'model_name', None)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _complete(self, messages: List[Dict[str, Any]], settings: tuple) -> str:
        max_tokens, temperature = settings
        return self.client.complete(messages, max_tokens=max_tokens, temperature=temperature)

    def _complete_json(self, task: GenerationTask, messages: List[Dict[str, Any]],
                       required: Iterable[str] = ()) -> Optional[Dict[str, Any]]:
        """Run one analysis call; None means the caller should fall back."""
        try:
            reply = self._complete(messages, ANALYSIS_SETTINGS)
        except CompletionError as e:
            logger.warning(f"{task} completion failed, using fallback: {e}")
            return None

        data = extract_json(reply)
        if data is None:
            logger.warning(f"{task} reply was not a JSON object, using fallback")
            return None
        if not has_keys(data, tuple(required)):
            missing = [key for key in required if key not in data]
            logger.warning(f"{task} reply missing keys {missing}, using fallback")
            return None
        return data

    # ------------------------------------------------------------------
    # Clone UI
    # ------------------------------------------------------------------

    def analyze_image(self, image_bytes: bytes, mime_type: str) -> Dict[str, Any]:
        """Describe the components, layout and palette of a screenshot."""
        image_base64 = base64.b64encode(image_bytes).decode('ascii')
        messages = prompts.build_ui_analysis_messages(image_base64, mime_type)
        data = self._complete_json(
            GenerationTask.ANALYZE_IMAGE, messages, REQUIRED_KEYS[GenerationTask.ANALYZE_IMAGE]
        )
        if data is None or not _is_ui_analysis(data):
            return fallbacks.fallback_ui_analysis()
        logger.info(f"Image analysis found {len(data['components'])} components")
        return data

    def generate_ui_code(self, analysis: Dict[str, Any]) -> str:
        """Turn a UI analysis into a React component; a non-empty reply is returned as-is."""
        try:
            messages = prompts.build_ui_code_messages(analysis)
            code = self._complete(messages, CODE_SETTINGS)
        except CompletionError as e:
            logger.warning(f"UI code generation failed, using fallback component: {e}")
            return fallbacks.fallback_ui_code(analysis)
        except Exception:
            logger.exception("UI code prompt could not be built, using fallback component")
            return fallbacks.fallback_ui_code(analysis)
        if not code or not code.strip():
            logger.warning("UI code reply was empty, using fallback component")
            return fallbacks.fallback_ui_code(analysis)
        return code

    # ------------------------------------------------------------------
    # Create Page
    # ------------------------------------------------------------------

    def generate_page(self, template: Optional[str], requirements: Optional[str],
                      style: Optional[str]) -> Dict[str, Any]:
        template = template or DEFAULT_TEMPLATE
        style = style or DEFAULT_STYLE
        messages = prompts.build_page_structure_messages(template, requirements or '', style)
        data = self._complete_json(
            GenerationTask.GENERATE_PAGE, messages, REQUIRED_KEYS[GenerationTask.GENERATE_PAGE]
        )
        if data is None or not isinstance(data.get('components'), list) or not isinstance(data.get('styles'), dict):
            return fallbacks.fallback_page_structure(template, style)
        data.setdefault('template', template)
        return data

    def generate_page_files(self, page: Dict[str, Any]) -> List[Dict[str, str]]:
        """
        Generate source files for a page structure.

        One call produces ``App.tsx`` and one call per component produces
        ``<Name>.tsx`` for at most ``MAX_COMPONENT_FILES`` components. A call
        answered with a non-2xx status is skipped; any other failure (network,
        timeout, missing configuration, malformed reply) abandons the step for
        ``fallback_page_files``. Config files are rendered locally and
        appended.
        """
        try:
            files: List[Dict[str, str]] = []

            app_code = self._try_complete(prompts.build_app_component_messages(page), CODE_SETTINGS, 'App.tsx')
            if app_code is not None:
                files.append({"name": "App.tsx", "content": app_code, "type": FileType.COMPONENT.value})

            components = [c for c in page.get('components') or [] if isinstance(c, dict) and c.get('name')]
            for component in components[:MAX_COMPONENT_FILES]:
                filename = f"{component['name']}.tsx"
                code = self._try_complete(
                    prompts.build_component_messages(component, page), COMPONENT_SETTINGS, filename
                )
                if code is not None:
                    files.append({"name": filename, "content": code, "type": FileType.COMPONENT.value})

            files.extend(fallbacks.config_files(page))
            return files
        except CompletionError as e:
            logger.warning(f"Page file generation failed, using fallback files: {e}")
            return fallbacks.fallback_page_files(page)
        except Exception:
            logger.exception("Page file generation failed, using fallback files")
            return fallbacks.fallback_page_files(page)

    def _try_complete(self, messages: List[Dict[str, Any]], settings: tuple, label: str) -> Optional[str]:
        try:
            return self._complete(messages, settings)
        except CompletionHTTPError as e:
            logger.warning(f"Skipping {label}: {e}")
            return None

    # ------------------------------------------------------------------
    # Improve
    # ------------------------------------------------------------------

    def improve_code(self, code: str) -> Dict[str, Any]:
        """Review code; result is ``{improvements: [...], optimizedCode: str}``."""
        data = self._complete_json(GenerationTask.IMPROVE_CODE, prompts.build_code_review_messages(code))
        if data is None:
            return fallbacks.fallback_code_analysis(code)

        improvements = data.get('improvements')
        optimized = data.get('optimizedCode')
        return {
            "improvements": improvements if isinstance(improvements, list) else [],
            "optimizedCode": optimized if isinstance(optimized, str) else code,
        }

    # ------------------------------------------------------------------
    # Analyze
    # ------------------------------------------------------------------

    def analyze_performance(self, project_path: Optional[str], metrics: Optional[Iterable[str]]) -> Dict[str, Any]:
        messages = prompts.build_performance_messages(project_path or '', metrics or [])
        data = self._complete_json(
            GenerationTask.ANALYZE_PERFORMANCE, messages, REQUIRED_KEYS[GenerationTask.ANALYZE_PERFORMANCE]
        )
        if data is None or not isinstance(data.get('performance'), dict):
            return fallbacks.fallback_performance_analysis()
        return data

    def analyze_patterns(self, codebase: Optional[str]) -> Dict[str, Any]:
        messages = prompts.build_patterns_messages(codebase or '')
        data = self._complete_json(
            GenerationTask.ANALYZE_PATTERNS, messages, REQUIRED_KEYS[GenerationTask.ANALYZE_PATTERNS]
        )
        if data is None:
            return fallbacks.fallback_pattern_analysis()
        return data


def _is_ui_analysis(data: Dict[str, Any]) -> bool:
    return (
        isinstance(data.get('components'), list)
        and isinstance(data.get('colorPalette'), list)
        and isinstance(data.get('layout'), str)
        and isinstance(data.get('estimatedComplexity'), str)
    )


def get_generation_service() -> GenerationService:
    """Get the app's generation service, building it on first use."""
    from ..extensions import get_components

    components = get_components()
    if components.generation_service is None:
        components.generation_service = GenerationService(components.completion_client)
    return components.generation_service
