"""Shared configuration, kernels and helpers."""
