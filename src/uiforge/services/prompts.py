"""
Prompt Templates
================

Deterministic builders for every chat transcript sent to the completion
service. Each ``build_*_messages`` function returns the full ``messages``
list (system + user) so the generation service only decides *when* to call.
"""

import json
from typing import Any, Dict, Iterable, List

# ---------------------------------------------------------------------------
# System roles
# ---------------------------------------------------------------------------

UI_ANALYST_ROLE = (
    "You are an expert UI/UX designer and frontend developer. Analyze images and "
    "provide detailed, accurate assessments of web interfaces."
)
REACT_DEVELOPER_ROLE = (
    "You are an expert React/TypeScript developer. Generate clean, modern, "
    "production-ready code using best practices."
)
PAGE_ARCHITECT_ROLE = (
    "You are an expert web architect and UI designer. Generate comprehensive page "
    "structures with proper component organization."
)
APP_COMPONENT_ROLE = "You are an expert React/TypeScript developer. Generate production-ready components."
COMPONENT_ROLE = "You are an expert React developer. Create reusable, accessible components."
PERFORMANCE_ROLE = (
    "You are an expert performance engineer and React optimization specialist. "
    "Provide realistic performance analysis and actionable recommendations."
)
PATTERNS_ROLE = (
    "You are an expert React architect and design pattern specialist. Analyze codebases "
    "for architectural patterns and provide insightful recommendations."
)
CODE_REVIEW_ROLE = (
    "You are an expert React/TypeScript code reviewer and senior developer. Provide "
    "thorough, actionable code analysis and improvements."
)


def _system(content: str) -> Dict[str, Any]:
    return {"role": "system", "content": content}


def _user(content: Any) -> Dict[str, Any]:
    return {"role": "user", "content": content}


def _join(items: Iterable[Any]) -> str:
    return ", ".join(str(item) for item in items)


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


# ---------------------------------------------------------------------------
# Clone UI
# ---------------------------------------------------------------------------

UI_ANALYSIS_PROMPT = """Analyze this UI/web design image and extract the following information:
1. Identify all UI components (headers, navigation, hero sections, buttons, forms, etc.)
2. Describe the layout structure
3. Extract the color palette used
4. Estimate the implementation complexity

Please respond in JSON format with this structure:
{
  "components": [{"type": "string", "description": "string"}],
  "colorPalette": ["hex_color1", "hex_color2", ...],
  "layout": "string description",
  "estimatedComplexity": "low|medium|high"
}"""


def build_ui_analysis_messages(image_base64: str, mime_type: str) -> List[Dict[str, Any]]:
    """Vision request: the screenshot travels as a data URL image part."""
    return [
        _system(UI_ANALYST_ROLE),
        _user([
            {"type": "text", "text": UI_ANALYSIS_PROMPT},
            {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{image_base64}"}},
        ]),
    ]


def build_ui_code_messages(analysis: Dict[str, Any]) -> List[Dict[str, Any]]:
    components = _join(
        f"{c.get('type', 'component')}: {c.get('description', '')}"
        for c in _as_list(analysis.get('components'))
        if isinstance(c, dict)
    )
    prompt = f"""Based on this UI analysis, generate a complete React TypeScript component that recreates the design:

Analysis:
- Components: {components}
- Layout: {analysis.get('layout', '')}
- Color Palette: {_join(_as_list(analysis.get('colorPalette')))}
- Complexity: {analysis.get('estimatedComplexity', '')}

Requirements:
1. Create a fully functional React TypeScript component
2. Use Tailwind CSS for styling
3. Include proper component structure and TypeScript types
4. Make it responsive and modern
5. Include the detected components in appropriate sections
6. Use the provided color palette
7. Add proper accessibility attributes
8. Export as default

Please provide ONLY the code, no explanations or markdown formatting."""
    return [_system(REACT_DEVELOPER_ROLE), _user(prompt)]


# ---------------------------------------------------------------------------
# Create Page
# ---------------------------------------------------------------------------

def build_page_structure_messages(template: str, requirements: str, style: str) -> List[Dict[str, Any]]:
    prompt = f"""Generate a {template} page structure based on these requirements:

Template: {template}
Requirements: {requirements}
Style: {style}

Please respond in JSON format with this structure:
{{
  "template": "{template}",
  "components": [{{"name": "string", "props": ["prop1", "prop2"]}}],
  "styles": {{
    "theme": "string",
    "colors": {{"primary": "hex", "secondary": "hex", "accent": "hex"}},
    "spacing": "string",
    "borderRadius": "string"
  }},
  "routes": ["route1", "route2"]
}}

Consider modern web design principles and the specified style theme."""
    return [_system(PAGE_ARCHITECT_ROLE), _user(prompt)]


def build_app_component_messages(page: Dict[str, Any]) -> List[Dict[str, Any]]:
    styles = page.get('styles') or {}
    prompt = f"""Generate a React TypeScript App component for a {page.get('template')} page with these specifications:

Components: {_join(c.get('name') for c in page.get('components', []) if isinstance(c, dict))}
Style: {styles.get('theme')}
Colors: {json.dumps(styles.get('colors') or {})}

Requirements:
1. Complete React TypeScript component
2. Use Tailwind CSS with the specified colors
3. Include all specified components
4. Modern, responsive design
5. Proper TypeScript types
6. Export as default

Provide ONLY the code, no explanations."""
    return [_system(APP_COMPONENT_ROLE), _user(prompt)]


def build_component_messages(component: Dict[str, Any], page: Dict[str, Any]) -> List[Dict[str, Any]]:
    styles = page.get('styles') or {}
    prompt = f"""Generate a React TypeScript {component.get('name')} component with props: {_join(component.get('props') or [])}.

Style: {styles.get('theme')}
Colors: {json.dumps(styles.get('colors') or {})}

Make it reusable, accessible, and styled with Tailwind CSS. Provide ONLY the code."""
    return [_system(COMPONENT_ROLE), _user(prompt)]


# ---------------------------------------------------------------------------
# Analyze
# ---------------------------------------------------------------------------

def build_performance_messages(project_path: str, metrics: Iterable[str]) -> List[Dict[str, Any]]:
    prompt = f"""Analyze the performance of a React/TypeScript project and provide realistic metrics and suggestions.

Project Context: {project_path}
Requested Metrics: {_join(metrics)}

Please respond in JSON format with this structure:
{{
  "performance": {{
    "loadTime": number, // in seconds (1-5 range)
    "bundleSize": number, // in KB (100-1000 range)
    "renderTime": number // in milliseconds (20-200 range)
  }},
  "suggestions": ["suggestion1", "suggestion2", "suggestion3"],
  "codeSmells": number, // 0-10 range
  "securityIssues": number // 0-5 range
}}

Provide realistic performance metrics and actionable optimization suggestions for a modern React application."""
    return [_system(PERFORMANCE_ROLE), _user(prompt)]


def build_patterns_messages(codebase: str) -> List[Dict[str, Any]]:
    prompt = f"""Analyze a React/TypeScript codebase for design patterns and anti-patterns.

Codebase Context: {codebase}

Please respond in JSON format with this structure:
{{
  "detected": [
    {{
      "name": "PatternName",
      "usage": "percentage%",
      "recommendation": "assessment and recommendation"
    }}
  ],
  "antiPatterns": [
    {{
      "name": "AntiPatternName",
      "instances": number,
      "severity": "low|medium|high"
    }}
  ]
}}

Focus on common React patterns like:
- Component Composition
- State Management (Context, Redux, Zustand)
- Error Boundaries
- Custom Hooks
- Render Props
- Higher-Order Components

And anti-patterns like:
- Prop Drilling
- Large Components
- Direct DOM Manipulation
- Memory Leaks
- Performance Issues"""
    return [_system(PATTERNS_ROLE), _user(prompt)]


# ---------------------------------------------------------------------------
# Improve
# ---------------------------------------------------------------------------

def build_code_review_messages(code: str) -> List[Dict[str, Any]]:
    prompt = f"""Analyze this React/TypeScript code and provide detailed improvement suggestions:

```
{code}
```

Please respond in JSON format with this structure:
{{
  "improvements": [
    {{
      "type": "performance|accessibility|security|maintainability",
      "description": "Brief description of the issue",
      "severity": "low|medium|high",
      "line": number,
      "suggestion": "Detailed suggestion for improvement"
    }}
  ],
  "optimizedCode": "// Improved version of the code with fixes applied"
}}

Focus on:
1. Performance optimizations (React.memo, useMemo, useCallback, etc.)
2. Accessibility improvements (ARIA labels, semantic HTML, etc.)
3. Security best practices (input validation, XSS prevention, etc.)
4. Code maintainability (TypeScript types, error handling, etc.)
5. Modern React patterns and best practices"""
    return [_system(CODE_REVIEW_ROLE), _user(prompt)]
