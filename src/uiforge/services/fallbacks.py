"""
External-Service Fallbacks
==========================

Static, schema-valid placeholders returned whenever the completion service
cannot be reached or its reply cannot be decoded. Every builder returns a
fresh object so callers may mutate the result.
"""

import json
from typing import Any, Dict, List, Optional

from ..constants import DEFAULT_STYLE, DEFAULT_TEMPLATE, DEFAULT_TEMPLATE_ROUTES, FileType


def default_routes(template: Optional[str]) -> List[str]:
    return list(DEFAULT_TEMPLATE_ROUTES.get(template or '', ("/",)))


# ---------------------------------------------------------------------------
# Clone UI
# ---------------------------------------------------------------------------

def fallback_ui_analysis() -> Dict[str, Any]:
    return {
        "components": [{"type": "component", "description": "Unable to analyze components"}],
        "colorPalette": ["#000000", "#ffffff"],
        "layout": "standard layout",
        "estimatedComplexity": "medium",
    }


def fallback_ui_code(analysis: Dict[str, Any]) -> str:
    """A generic landing component with one card per detected component."""
    components = analysis.get('components') if isinstance(analysis, dict) else None
    if not isinstance(components, list):
        components = []
    cards = "".join(
        f"""
          <div key={{{i}}} className="p-6 bg-white rounded-lg shadow-md">
            <h3 className="text-xl font-semibold mb-2">{comp.get('type', 'component')}</h3>
            <p className="text-gray-600">{comp.get('description', '')}</p>
          </div>
          """
        for i, comp in enumerate(components)
        if isinstance(comp, dict)
    )
    return f"""import React from 'react';

const GeneratedComponent: React.FC = () => {{
  return (
    <div className="min-h-screen bg-slate-50">
      <header className="bg-slate-900 text-white p-4">
        <nav className="max-w-6xl mx-auto flex justify-between items-center">
          <h1 className="text-xl font-bold">Your Logo</h1>
          <div className="hidden md:flex space-x-6">
            <a href="#" className="hover:text-violet-400">Home</a>
            <a href="#" className="hover:text-violet-400">About</a>
            <a href="#" className="hover:text-violet-400">Contact</a>
          </div>
        </nav>
      </header>

      <main className="max-w-6xl mx-auto px-4 py-12">
        <section className="text-center mb-16">
          <h2 className="text-4xl font-bold mb-4">Welcome to Your Site</h2>
          <p className="text-xl text-gray-600 mb-8">Generated from your design</p>
          <button className="bg-violet-600 text-white px-8 py-3 rounded-lg hover:bg-violet-700">
            Get Started
          </button>
        </section>

        <section className="grid md:grid-cols-3 gap-8">{cards}</section>
      </main>
    </div>
  );
}};

export default GeneratedComponent;"""


# ---------------------------------------------------------------------------
# Create Page
# ---------------------------------------------------------------------------

def fallback_page_structure(template: Optional[str], style: Optional[str]) -> Dict[str, Any]:
    return {
        "template": template or DEFAULT_TEMPLATE,
        "components": [
            {"name": "Header", "props": ["title", "navigation"]},
            {"name": "Hero", "props": ["title", "subtitle", "cta"]},
            {"name": "Features", "props": ["items", "layout"]},
            {"name": "Footer", "props": ["links", "copyright"]},
        ],
        "styles": {
            "theme": style or DEFAULT_STYLE,
            "colors": {
                "primary": "#6366f1",
                "secondary": "#1e293b",
                "accent": "#f59e0b",
            },
            "spacing": "8px",
            "borderRadius": "8px",
        },
        "routes": default_routes(template),
    }


def render_tailwind_config(colors: Optional[Dict[str, Any]]) -> str:
    if not isinstance(colors, dict):
        colors = {}
    return f"""module.exports = {{
  content: ["./src/**/*.{{js,jsx,ts,tsx}}"],
  theme: {{
    extend: {{
      colors: {{
        primary: "{colors.get('primary', '')}",
        secondary: "{colors.get('secondary', '')}",
        accent: "{colors.get('accent', '')}"
      }}
    }}
  }},
  plugins: []
}};"""


def render_routes_file(routes: Optional[List[str]]) -> str:
    if not isinstance(routes, list):
        routes = []
    return f"""export const routes = {json.dumps(routes, indent=2)};

export default routes;"""


def config_files(page: Dict[str, Any]) -> List[Dict[str, str]]:
    """The locally rendered config files every generated page ships with."""
    styles = page.get('styles')
    if not isinstance(styles, dict):
        styles = {}
    return [
        {"name": "tailwind.config.js", "content": render_tailwind_config(styles.get('colors')), "type": FileType.CONFIG.value},
        {"name": "routes.ts", "content": render_routes_file(page.get('routes')), "type": FileType.CONFIG.value},
    ]


def fallback_page_files(page: Dict[str, Any]) -> List[Dict[str, str]]:
    return [
        {"name": "App.tsx", "content": "// Main application component", "type": FileType.COMPONENT.value},
        {"name": "Header.tsx", "content": "// Header component", "type": FileType.COMPONENT.value},
        *config_files(page),
    ]


# ---------------------------------------------------------------------------
# Analyze
# ---------------------------------------------------------------------------

def fallback_performance_analysis() -> Dict[str, Any]:
    return {
        "performance": {
            "loadTime": 2.1,
            "bundleSize": 385,
            "renderTime": 75,
        },
        "suggestions": [
            "Consider code splitting for better performance",
            "Optimize images and use modern formats like WebP",
            "Implement lazy loading for components and routes",
            "Use React.memo for expensive components",
            "Minimize bundle size by tree-shaking unused code",
        ],
        "codeSmells": 3,
        "securityIssues": 1,
    }


def fallback_pattern_analysis() -> Dict[str, Any]:
    return {
        "detected": [
            {"name": "Component Composition", "usage": "85%", "recommendation": "Good usage of composition over inheritance"},
            {"name": "Custom Hooks", "usage": "70%", "recommendation": "Well implemented for logic reuse"},
            {"name": "State Management", "usage": "60%", "recommendation": "Consider upgrading to more robust solution for complex state"},
            {"name": "Error Boundaries", "usage": "40%", "recommendation": "Add more error boundaries for better error handling"},
        ],
        "antiPatterns": [
            {"name": "Prop Drilling", "instances": 3, "severity": "medium"},
            {"name": "Large Components", "instances": 2, "severity": "low"},
            {"name": "Inline Styles", "instances": 1, "severity": "low"},
        ],
    }


# ---------------------------------------------------------------------------
# Improve
# ---------------------------------------------------------------------------

def fallback_code_analysis(code: str) -> Dict[str, Any]:
    """Generic review notes; the submitted code comes back unchanged."""
    return {
        "improvements": [
            {
                "type": "performance",
                "description": "Consider using React.memo for expensive components",
                "severity": "medium",
                "line": 1,
                "suggestion": "Wrap component with React.memo to prevent unnecessary re-renders",
            },
            {
                "type": "accessibility",
                "description": "Ensure proper ARIA labels and semantic HTML",
                "severity": "high",
                "line": 1,
                "suggestion": "Add descriptive alt attributes and ARIA labels where needed",
            },
            {
                "type": "security",
                "description": "Validate and sanitize user inputs",
                "severity": "high",
                "line": 1,
                "suggestion": "Use proper input validation and sanitization techniques",
            },
        ],
        "optimizedCode": code,
    }
