"""Shopping list manager: ingredients, dishes and materialized shopping lists."""
