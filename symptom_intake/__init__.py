# symptom_intake/__init__.py
