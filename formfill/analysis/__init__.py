from formfill.analysis.analyzer import FormStructureAnalyzer, analyze_template
from formfill.analysis.families import load_form_family

__all__ = ["FormStructureAnalyzer", "analyze_template", "load_form_family"]
