"""Meal plan domain module.

One meal plan per owner: a date range and the recipes planned inside it.
Saving a plan for an owner either replaces the existing plan's contents or
creates the plan on first save.
"""
