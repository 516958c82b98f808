"""
tilewm.config - Configuracion como modulos Python.

    - rules     : Reglas por defecto y clases del escritorio a ignorar
    - shortcuts : Atajos de teclado -> UserInput
"""
