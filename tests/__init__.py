"""
Bayes Primer — Test Suite
=========================

Test modules:
- test_sampler.py: Metropolis-Hastings sampler properties and configuration errors
- test_priors.py: Prior log-densities and PriorSpec handling
- test_coin.py: Observation sets and the Bernoulli log-likelihood
- test_conjugate.py: Exact Beta posterior updating
- test_glm.py: Frequentist vs Bayesian GLMs and separation detection
- test_plotting.py: Figure helpers
- test_workflow.py: End-to-end walkthrough
"""
