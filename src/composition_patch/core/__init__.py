"""
Core do Composition Patch.

Implementação independente de controller, transporte e persistência.
Todas as operações são síncronas e operam sobre objetos do chamador, sem
estado compartilhado interno.
"""
