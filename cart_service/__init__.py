"""
cart_service
Microservicio de carrito delante de la brewery API (carrito, inventario, precios).
"""
