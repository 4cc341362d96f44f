"""
propexpr core: values, expression language, symbol contexts, manifests.
"""
