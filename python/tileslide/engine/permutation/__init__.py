from tileslide.engine.permutation.analyzer import PermutationAnalyzer, PermutationSignature

__all__ = ["PermutationAnalyzer", "PermutationSignature"]
