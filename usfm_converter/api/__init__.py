"""面向界面层的服务函数。"""
