from conjax.models.conjugate_model import ConjugateModel

__all__ = ["ConjugateModel"]
