"""Section set aside for order operations; it holds no modules yet."""