"""
GitOps platform infrastructure
Reusable declarations for the cluster, prerequisites and Kargo stacks
"""
