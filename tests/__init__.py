# SPDX-License-Identifier: Apache-2.0
"""
kvcompat tests

Unit tests for the option model, policy translator, result normalizer and
fan-out adapters, plus end-to-end facade tests against an in-memory cluster
client (tests/mock).
"""
