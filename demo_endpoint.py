"""
Quick demo script to run the HotPay AnyChain API locally.

This script starts a local server and shows how to make requests to the endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting HotPay AnyChain Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:     GET    http://localhost:8000/health")
    print("   - Merchants:        GET    http://localhost:8000/api/merchants")
    print("   - Invoices:         GET    http://localhost:8000/api/invoices?merchantId=&status=&q=")
    print("   - Mark Paid:        POST   http://localhost:8000/api/invoices/{id}/mark-paid")
    print("   - Payments:         GET    http://localhost:8000/api/payments?invoiceId=")
    print("   - Payment Options:  GET    http://localhost:8000/api/payment-options?merchantId=")
    print("   - API Docs:                http://localhost:8000/docs")
    print()
    print("🌱 Demo data:")
    print("   Set SEED_DEMO_DATA=true to create the demo merchant on startup")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/api/merchants" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"name": "Acme"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "hotpay.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
