"""Optimized Demo API"""
