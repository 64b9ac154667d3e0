"""Typed, serializable faults for RPC boundaries and QoS retry directives."""
